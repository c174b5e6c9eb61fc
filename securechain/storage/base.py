"""
Abstract graph source interface.

A graph source hands out the node and edge arrays the engine runs on. The
service never writes graphs back, so the contract is read-only: sources
can be swapped (built-in sample, JSON file, ...) without touching the
routers or the engine.
"""

from abc import ABC, abstractmethod

from securechain.models.graph import GraphData


class GraphSourceError(Exception):
    """Raised when a graph source cannot produce a valid graph."""

    pass


class GraphSource(ABC):
    """
    Abstract base class for graph providers.

    Implementations should return a fully validated GraphData and raise
    GraphSourceError (never a bare parsing or I/O error) when they cannot.
    """

    @abstractmethod
    def load(self) -> GraphData:
        """
        Load the graph.

        Returns:
            Validated GraphData

        Raises:
            GraphSourceError: If the graph cannot be loaded or validated
        """
        pass
