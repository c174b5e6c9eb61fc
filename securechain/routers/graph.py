"""
Graph exploration router.

Wired to:
- project_graph for type / minimum-risk filtered views
- search_nodes for the search box
- build_dependency_tree for the tree view
- AdjacencyIndex and risk_band for node details
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from securechain.config import get_settings
from securechain.engine.insights import risk_band
from securechain.engine.projection import project_graph
from securechain.engine.propagation import AdjacencyIndex
from securechain.engine.search import search_nodes
from securechain.engine.tree_builder import build_dependency_tree
from securechain.models.enums import ALL_TYPES
from securechain.models.graph import GraphData
from securechain.routers.dependencies import get_graph
from securechain.utils.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get("")
async def get_graph_view(
    filter_type: str = Query(default=ALL_TYPES, description="'all' or a node type"),
    min_risk: int = Query(default=0, ge=0, le=100),
    graph: GraphData = Depends(get_graph),
):
    """
    Get the graph filtered by node type and minimum risk score.
    """
    try:
        view = project_graph(graph.nodes, graph.edges, filter_type, min_risk)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Unknown node type: {filter_type}") from e

    logger.info(
        "graph_view_fetch",
        filter_type=view.filter_type,
        min_risk=min_risk,
        nodes=len(view.nodes),
        edges=len(view.edges),
    )

    return {"success": True, "data": view.model_dump(mode="json")}


@router.get("/search")
async def search_graph(
    q: str = Query(default="", description="Search text"),
    graph: GraphData = Depends(get_graph),
):
    """
    Search nodes by name, description or vendor.
    """
    settings = get_settings()
    results = search_nodes(
        graph.nodes,
        q,
        limit=settings.search_result_limit,
        min_query_length=settings.search_min_query_length,
    )

    return {
        "success": True,
        "data": {
            "query": q,
            "results": [node.model_dump(mode="json") for node in results],
        },
    }


@router.get("/tree")
async def get_dependency_tree(
    root_id: Optional[str] = Query(default=None, description="Tree root node id"),
    graph: GraphData = Depends(get_graph),
):
    """
    Get the dependency tree from a root node along outgoing edges.
    """
    root_id = root_id or get_settings().default_tree_root
    tree = build_dependency_tree(graph.nodes, graph.edges, root_id)
    if tree is None:
        raise HTTPException(status_code=404, detail=f"Node {root_id} not found")

    return {
        "success": True,
        "data": {
            "root_id": root_id,
            "size": tree.size(),
            "tree": tree.model_dump(mode="json"),
        },
    }


@router.get("/nodes/{node_id}")
async def get_node_details(
    node_id: str,
    graph: GraphData = Depends(get_graph),
):
    """
    Get a node with its risk band and incoming/outgoing connections.
    """
    node = graph.get_node(node_id)
    if node is None:
        raise HTTPException(status_code=404, detail=f"Node {node_id} not found")

    connections = AdjacencyIndex.build(graph.edges).connections(node_id)

    return {
        "success": True,
        "data": {
            "node": node.model_dump(mode="json"),
            "risk_band": risk_band(node.risk_score).value,
            "connections": connections.model_dump(mode="json"),
        },
    }
