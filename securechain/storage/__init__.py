"""
Graph data sources.

Sources are read-only: the service loads a node/edge set and runs the
engine on it, nothing is written back.
"""

from functools import lru_cache

from securechain.config import get_settings

from .base import GraphSource, GraphSourceError
from .json_source import JsonGraphSource
from .static_source import SAMPLE_GRAPH, StaticGraphSource


@lru_cache
def get_graph_source() -> GraphSource:
    """
    Get cached graph source instance (singleton).

    Uses the JSON file named by ``graph_data_path`` when set, otherwise the
    built-in sample graph.

    Returns:
        GraphSource implementation instance
    """
    settings = get_settings()
    if settings.graph_data_path:
        return JsonGraphSource(settings.graph_data_path)
    return StaticGraphSource()


__all__ = [
    "GraphSource",
    "GraphSourceError",
    "JsonGraphSource",
    "SAMPLE_GRAPH",
    "StaticGraphSource",
    "get_graph_source",
]
