"""
Graph analysis router.

Wired to:
- degree / risk-weighted centrality
- compute_graph_stats for the stats panel
- InsightsEngine, optionally with an active propagation simulation
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from securechain.config import get_settings
from securechain.engine.centrality import (
    degree_centrality,
    rank_nodes,
    risk_weighted_centrality,
)
from securechain.engine.insights import InsightsEngine, compute_graph_stats
from securechain.engine.propagation import RiskPropagator
from securechain.models.graph import GraphData
from securechain.routers.dependencies import get_graph
from securechain.routers.propagation import resolve_depth
from securechain.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("/centrality")
async def get_centrality(
    weighted: bool = Query(default=False, description="Use risk-weighted centrality"),
    limit: Optional[int] = Query(default=None, ge=1, description="Top-N nodes"),
    graph: GraphData = Depends(get_graph),
):
    """
    Get node centrality scores, highest first.
    """
    if weighted:
        scores = risk_weighted_centrality(graph.nodes, graph.edges)
    else:
        scores = degree_centrality(graph.nodes, graph.edges)

    ranked = rank_nodes(scores, limit)

    logger.info("centrality_fetch", weighted=weighted, limit=limit, returned=len(ranked))

    return {
        "success": True,
        "data": {
            "metric": "risk_weighted" if weighted else "degree",
            "scores": [
                {"node_id": node_id, "score": round(score, 4)} for node_id, score in ranked
            ],
        },
    }


@router.get("/stats")
async def get_stats(graph: GraphData = Depends(get_graph)):
    """
    Get headline counts for the graph.
    """
    stats = compute_graph_stats(graph.nodes, graph.edges)
    return {"success": True, "data": stats.model_dump(mode="json")}


@router.get("/insights")
async def get_insights(
    source_id: Optional[str] = Query(default=None, description="Active propagation source"),
    max_depth: Optional[int] = Query(default=None, ge=0, description="Hop limit"),
    graph: GraphData = Depends(get_graph),
):
    """
    Get graph-wide risk insights, with a propagation alert when a source is given.
    """
    propagation = None
    if source_id is not None:
        depth = resolve_depth(max_depth)
        propagator = RiskPropagator(max_visits=get_settings().propagation_max_visits)
        propagation = propagator.propagate(source_id, graph.nodes, graph.edges, depth)

    insights = InsightsEngine().generate(graph.nodes, graph.edges, propagation)

    logger.info(
        "insights_fetch",
        exposure_level=insights.exposure_level.value,
        propagation_active=propagation is not None,
    )

    return {"success": True, "data": insights.model_dump(mode="json")}
