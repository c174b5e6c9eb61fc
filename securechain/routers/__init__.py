"""API routers for all endpoints."""

from securechain.routers import analysis, graph, propagation, system

__all__ = [
    "analysis",
    "graph",
    "propagation",
    "system",
]
