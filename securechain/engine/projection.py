"""
View Projection: filtered subgraph for a type and minimum risk.

Purely derived state: every call returns fresh lists and keeps the input
order of both nodes and edges.
"""

from typing import Sequence, Union

from securechain.models.enums import ALL_TYPES, NodeType
from securechain.models.graph import Edge, GraphView, Node


def project_graph(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    filter_type: Union[NodeType, str] = ALL_TYPES,
    min_risk: int = 0,
) -> GraphView:
    """
    Select nodes by type and risk, then the edges between selected nodes.

    Args:
        nodes: Graph nodes
        edges: Graph edges
        filter_type: ``"all"`` or a NodeType (or its string value)
        min_risk: Minimum risk score a node must have to be kept

    Returns:
        GraphView with the selected nodes and edges

    Raises:
        ValueError: If filter_type is neither "all" nor a known node type
    """
    type_filter = None if filter_type == ALL_TYPES else NodeType(filter_type)

    selected = [
        node
        for node in nodes
        if (type_filter is None or node.type == type_filter)
        and node.risk_score >= min_risk
    ]
    selected_ids = {node.id for node in selected}
    selected_edges = [
        edge
        for edge in edges
        if edge.source in selected_ids and edge.target in selected_ids
    ]

    return GraphView(
        filter_type=ALL_TYPES if type_filter is None else type_filter.value,
        min_risk=min_risk,
        nodes=selected,
        edges=selected_edges,
    )
