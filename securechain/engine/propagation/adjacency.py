"""
Adjacency Index: forward and reverse edge lookups.

Built once per propagation call in O(E). Each per-node list keeps the
original edge-list order so traversal, and therefore path selection, is
reproducible.
"""

from typing import Iterable

from securechain.models.graph import Edge, Node, NodeConnections


class AdjacencyIndex:
    """
    Outgoing and incoming edge lists keyed by node id.

    Lookups for ids with no edges (or ids not in the graph at all) return an
    empty list rather than raising.

    Example:
        >>> index = AdjacencyIndex.build(edges)
        >>> [e.source for e in index.incoming("software_log4j")]
        ['product_veeam', 'product_jenkins']
    """

    def __init__(self):
        self._outgoing: dict[str, list[Edge]] = {}
        self._incoming: dict[str, list[Edge]] = {}

    @classmethod
    def build(cls, edges: Iterable[Edge]) -> "AdjacencyIndex":
        """Index ``edges`` by source and by target."""
        index = cls()
        for edge in edges:
            index._outgoing.setdefault(edge.source, []).append(edge)
            index._incoming.setdefault(edge.target, []).append(edge)
        return index

    def outgoing(self, node_id: str) -> list[Edge]:
        """Edges whose source is ``node_id``."""
        return self._outgoing.get(node_id, [])

    def incoming(self, node_id: str) -> list[Edge]:
        """Edges whose target is ``node_id``."""
        return self._incoming.get(node_id, [])

    def connections(self, node_id: str) -> NodeConnections:
        """Both edge lists for ``node_id`` as a response model."""
        return NodeConnections(
            node_id=node_id,
            incoming=list(self.incoming(node_id)),
            outgoing=list(self.outgoing(node_id)),
        )


def index_nodes(nodes: Iterable[Node]) -> dict[str, Node]:
    """Map id -> node; the first occurrence of a duplicated id wins."""
    index: dict[str, Node] = {}
    for node in nodes:
        index.setdefault(node.id, node)
    return index
