"""
Graph Centrality: connectedness metrics over the whole risk graph.

Two independent metrics, both computed over the full graph rather than a
propagation result:

- Degree centrality: number of edge endpoints a node occupies, counted
  multigraph-style (parallel edges each count, a self-loop counts twice).
- Risk-weighted centrality: ``neighbors * (1 + avg_neighbor_risk / 100)``
  where neighbors are the distinct nodes adjacent in either direction.

The neighbor structure is built once with networkx instead of rescanning
the edge list per node.
"""

from typing import Optional, Sequence

import networkx as nx
import structlog

from securechain.models.graph import Edge, Node

from .propagation.adjacency import index_nodes

logger = structlog.get_logger()


def degree_centrality(nodes: Sequence[Node], edges: Sequence[Edge]) -> dict[str, int]:
    """
    Count edge endpoints per node.

    Every listed node is present (possibly with 0). Ids that only appear as
    dangling edge endpoints are included too, after the listed nodes.

    Args:
        nodes: Graph nodes
        edges: Graph edges

    Returns:
        Dict mapping node id -> degree
    """
    graph = nx.MultiDiGraph()
    graph.add_nodes_from(node.id for node in nodes)
    graph.add_edges_from((edge.source, edge.target) for edge in edges)

    centrality = {node_id: graph.degree(node_id) for node_id in graph.nodes}

    logger.debug(
        "degree_centrality_computed",
        node_count=len(centrality),
        edge_count=len(edges),
    )

    return centrality


def risk_weighted_centrality(
    nodes: Sequence[Node], edges: Sequence[Edge]
) -> dict[str, float]:
    """
    Weight each node's neighbor count by the mean risk of those neighbors.

    Neighbors missing from ``nodes`` contribute risk 0. A node with no
    neighbors scores 0.0.

    Args:
        nodes: Graph nodes
        edges: Graph edges

    Returns:
        Dict mapping node id -> risk-weighted score, for listed nodes only
    """
    graph = nx.DiGraph()
    graph.add_nodes_from(node.id for node in nodes)
    graph.add_edges_from((edge.source, edge.target) for edge in edges)

    node_index = index_nodes(nodes)
    scores: dict[str, float] = {}

    for node in nodes:
        neighbors = list(
            dict.fromkeys([*graph.successors(node.id), *graph.predecessors(node.id)])
        )
        if not neighbors:
            scores[node.id] = 0.0
            continue

        neighbor_risks = [
            node_index[n].risk_score if n in node_index else 0 for n in neighbors
        ]
        avg_neighbor_risk = sum(neighbor_risks) / len(neighbor_risks)
        scores[node.id] = len(neighbors) * (1 + avg_neighbor_risk / 100)

    logger.debug("risk_weighted_centrality_computed", node_count=len(scores))

    return scores


def rank_nodes(
    scores: dict[str, float], limit: Optional[int] = None
) -> list[tuple[str, float]]:
    """
    Order node scores from highest to lowest, ties broken by node id.

    Args:
        scores: Output of one of the centrality functions
        limit: Optional number of entries to keep

    Returns:
        List of (node_id, score) pairs
    """
    ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit] if limit is not None else ranked
