"""
Risk propagation router.

Wired to:
- RiskPropagator for the bounded BFS simulation
- Settings for default depth, depth cap and visit budget
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from securechain.config import get_settings
from securechain.engine.propagation import RiskPropagator
from securechain.models.graph import GraphData
from securechain.routers.dependencies import get_graph
from securechain.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


def resolve_depth(max_depth: Optional[int]) -> int:
    """Apply the configured default and cap to a requested depth."""
    settings = get_settings()
    if max_depth is None:
        return settings.propagation_default_depth
    if max_depth > settings.propagation_max_depth:
        raise HTTPException(
            status_code=422,
            detail=f"max_depth must be <= {settings.propagation_max_depth}",
        )
    return max_depth


@router.get("/{source_id}")
async def run_propagation(
    source_id: str,
    max_depth: Optional[int] = Query(default=None, ge=0, description="Hop limit"),
    graph: GraphData = Depends(get_graph),
):
    """
    Simulate risk propagating from a source node.

    An unknown source is not an error: the result contains only the source.
    """
    depth = resolve_depth(max_depth)
    propagator = RiskPropagator(max_visits=get_settings().propagation_max_visits)
    result = propagator.propagate(source_id, graph.nodes, graph.edges, depth)

    logger.info(
        "propagation_run",
        source_id=source_id,
        max_depth=depth,
        affected_count=result.affected_count,
        impact_level=result.impact_level.value,
    )

    return {
        "success": True,
        "data": {
            "result": result.model_dump(mode="json"),
            "hop_counts": {
                node_id: result.hop_count(node_id) for node_id in result.propagation_paths
            },
            "affected_edges": [
                edge.model_dump(mode="json")
                for edge in result.affected_edges(graph.edges)
            ],
        },
    }
