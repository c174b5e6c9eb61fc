"""
System health and configuration router.

Wired to:
- GraphSource for data availability
- Settings for configuration
"""

import time

from fastapi import APIRouter

from securechain import __version__
from securechain.config import get_settings
from securechain.storage import GraphSourceError, get_graph_source
from securechain.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()

# Track startup time for uptime calculation
_startup_time = time.time()


@router.get("/health")
async def system_health():
    """
    Get system health status.
    Loads the graph to verify the data source is usable.
    """
    uptime = time.time() - _startup_time

    graph_status = "healthy"
    node_count = 0
    edge_count = 0
    try:
        graph = get_graph_source().load()
        node_count = len(graph.nodes)
        edge_count = len(graph.edges)
    except GraphSourceError as e:
        graph_status = f"unhealthy: {str(e)}"

    return {
        "success": True,
        "data": {
            "status": "healthy" if graph_status == "healthy" else "degraded",
            "version": __version__,
            "uptime_seconds": round(uptime, 1),
            "graph": graph_status,
            "nodes": node_count,
            "edges": edge_count,
        },
    }


@router.get("/config")
async def get_system_config():
    """
    Get system configuration (non-sensitive values only).
    """
    settings = get_settings()

    return {
        "success": True,
        "data": {
            "log_level": settings.log_level,
            "graph_source": "json" if settings.graph_data_path else "static",
            "propagation_default_depth": settings.propagation_default_depth,
            "propagation_max_depth": settings.propagation_max_depth,
            "propagation_max_visits": settings.propagation_max_visits,
            "search_result_limit": settings.search_result_limit,
            "default_tree_root": settings.default_tree_root,
        },
    }
