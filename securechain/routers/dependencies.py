"""
Shared FastAPI dependencies.
"""

from fastapi import HTTPException

from securechain.models.graph import GraphData
from securechain.storage import GraphSourceError, get_graph_source
from securechain.utils.logging import get_logger

logger = get_logger(__name__)


def get_graph() -> GraphData:
    """
    Load the current graph from the configured source.

    Raises:
        HTTPException: 503 if the graph source is unavailable
    """
    try:
        return get_graph_source().load()
    except GraphSourceError as e:
        logger.error("graph_unavailable", error=str(e))
        raise HTTPException(status_code=503, detail="Graph data unavailable") from e
