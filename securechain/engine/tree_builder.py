"""
Dependency Tree Builder: tree view of outgoing relationships.

Walks outgoing edges depth-first from a root. A single visited set is
shared by the whole walk, so a node reachable along several branches only
appears under the first branch that reaches it, and cycles end the branch.
"""

from typing import Optional, Sequence

import structlog

from securechain.models.graph import DependencyTreeNode, Edge, Node

from .propagation.adjacency import AdjacencyIndex, index_nodes

logger = structlog.get_logger()


def build_dependency_tree(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    root_id: str,
) -> Optional[DependencyTreeNode]:
    """
    Build the dependency tree rooted at ``root_id``.

    Args:
        nodes: Graph nodes
        edges: Graph edges
        root_id: Node to start from

    Returns:
        Root DependencyTreeNode, or None if ``root_id`` is not a known node
    """
    node_index = index_nodes(nodes)
    if root_id not in node_index:
        logger.debug("dependency_tree_root_missing", root_id=root_id)
        return None

    adjacency = AdjacencyIndex.build(edges)
    visited: set[str] = set()

    def build(node_id: str) -> Optional[DependencyTreeNode]:
        if node_id in visited:
            return None
        visited.add(node_id)

        node = node_index.get(node_id)
        if node is None:
            return None

        children = []
        for edge in adjacency.outgoing(node_id):
            child = build(edge.target)
            if child is not None:
                children.append(child)
        return DependencyTreeNode(node=node, children=children)

    tree = build(root_id)

    logger.debug("dependency_tree_built", root_id=root_id, size=tree.size())

    return tree
