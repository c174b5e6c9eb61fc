"""
Risk Propagator: bounded breadth-first risk traversal.

Starting from a source node, risk spreads one hop at a time:

1. To every node with an edge *into* the current node (dependents, users and
   suppliers of the current node), whatever the relation.
2. Along every ``affected_by`` edge *out of* the current node.

Traversal is a strict FIFO BFS with visited-once semantics, so:
- every node is queued at most once and cycles terminate;
- the first path recorded for a node is a minimum-hop path;
- for fixed inputs the output is identical across runs, since the only
  iteration order involved is edge-list order.

Nodes at ``max_depth`` are recorded but not expanded. Malformed input never
raises: an unknown source or dangling edge endpoint simply has risk 0.
"""

from collections import deque
from typing import Optional, Sequence

import structlog

from securechain.models.enums import RelationType
from securechain.models.graph import Edge, Node
from securechain.models.propagation import PropagationResult

from .adjacency import AdjacencyIndex, index_nodes
from .impact_classifier import ImpactClassifier

logger = structlog.get_logger()


class RiskPropagator:
    """
    Computes the set of entities transitively affected by a risk event.

    Stateless between calls: every ``propagate`` call allocates its own
    index, queue, visited set and path map, so one instance can be shared
    by concurrent callers.

    Attributes:
        classifier: Impact classification policy
        max_visits: Optional cap on affected nodes per call (None = unbounded)
        logger: Structured logger

    Example:
        >>> propagator = RiskPropagator()
        >>> result = propagator.propagate("vuln_cve2021_44228", nodes, edges, max_depth=2)
        >>> result.affected_count
        3
    """

    DEFAULT_MAX_DEPTH = 3

    def __init__(
        self,
        classifier: Optional[ImpactClassifier] = None,
        max_visits: Optional[int] = None,
    ):
        """
        Initialize the propagator.

        Args:
            classifier: Optional custom impact classifier
            max_visits: Node-visit budget; discovery stops once this many
                non-source nodes are affected
        """
        self.classifier = classifier or ImpactClassifier()
        self.max_visits = max_visits
        self.logger = structlog.get_logger()

    def propagate(
        self,
        source_id: str,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> PropagationResult:
        """
        Run a bounded propagation from ``source_id``.

        Args:
            source_id: Node the risk event starts from
            nodes: Node records used for risk and severity lookups
            edges: Directed edges to traverse
            max_depth: Maximum hops from the source (<= 0 means source only)

        Returns:
            PropagationResult for this source and depth
        """
        index = AdjacencyIndex.build(edges)

        # dict as an insertion-ordered set
        affected: dict[str, None] = {source_id: None}
        paths: dict[str, list[str]] = {}
        queue: deque[tuple[str, list[str], int]] = deque([(source_id, [source_id], 0)])
        truncated = False

        def discover(node_id: str, path: list[str], depth: int) -> bool:
            nonlocal truncated
            if node_id in affected:
                return True
            if self.max_visits is not None and len(affected) - 1 >= self.max_visits:
                truncated = True
                return False
            affected[node_id] = None
            new_path = path + [node_id]
            paths[node_id] = new_path
            queue.append((node_id, new_path, depth + 1))
            return True

        while queue and not truncated:
            node_id, path, depth = queue.popleft()

            if depth >= max_depth:
                continue

            # Dependents of this node inherit its risk
            for edge in index.incoming(node_id):
                if not discover(edge.source, path, depth):
                    break

            if truncated:
                break

            # Vulnerabilities this node is affected by
            for edge in index.outgoing(node_id):
                if edge.relation != RelationType.AFFECTED_BY:
                    continue
                if not discover(edge.target, path, depth):
                    break

        node_index = index_nodes(nodes)
        affected_ids = list(affected)
        affected_count = len(affected_ids) - 1
        average_risk = sum(
            node_index[n].risk_score if n in node_index else 0 for n in affected_ids
        ) / len(affected_ids)

        source = node_index.get(source_id)
        impact_level = self.classifier.classify(
            affected_count=affected_count,
            average_risk=average_risk,
            source_severity=source.severity if source else None,
        )

        result = PropagationResult(
            source_id=source_id,
            max_depth=max_depth,
            affected_nodes=affected_ids,
            propagation_paths=paths,
            impact_level=impact_level,
            affected_count=affected_count,
            average_risk=average_risk,
            truncated=truncated,
        )

        self.logger.debug(
            "risk_propagation_computed",
            source_id=source_id,
            max_depth=max_depth,
            affected_count=affected_count,
            average_risk=round(average_risk, 2),
            impact_level=impact_level.value,
            source_known=source is not None,
            truncated=truncated,
        )

        return result


def propagate(
    source_id: str,
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    max_depth: int = RiskPropagator.DEFAULT_MAX_DEPTH,
    max_visits: Optional[int] = None,
) -> PropagationResult:
    """
    Functional entry point: ``RiskPropagator(max_visits=...).propagate(...)``.
    """
    return RiskPropagator(max_visits=max_visits).propagate(
        source_id, nodes, edges, max_depth
    )
