"""SecureChain: supply-chain risk graph and risk propagation service."""

__version__ = "0.1.0"
