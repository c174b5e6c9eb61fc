"""
Risk Insights: graph statistics and qualitative risk posture.

Derives headline numbers and warnings from the whole graph:

Exposure classification (waterfall):
- CRITICAL: any node with critical severity
- HIGH:     more than 5 high-risk nodes (risk_score >= 70)
- MEDIUM:   more than 2 high-risk nodes
- LOW:      otherwise

Critical dependency chains are found by walking outgoing edges depth-first
from every organization (to depth 3) and keeping paths of at least three
entities that end at a node with no outgoing edges.
"""

import math
from typing import Optional, Sequence

import structlog

from securechain.models.enums import (
    ExposureLevel,
    NodeType,
    RelationType,
    RiskBand,
    Severity,
)
from securechain.models.graph import Edge, Node
from securechain.models.insights import GraphStats, PropagationAlert, RiskInsights
from securechain.models.propagation import PropagationResult

from .propagation.adjacency import AdjacencyIndex, index_nodes

logger = structlog.get_logger()

HIGH_RISK_THRESHOLD = 70
CHAIN_MAX_DEPTH = 3
CHAIN_MIN_LENGTH = 3
CHAIN_LIMIT = 3
CASCADE_MIN_AFFECTED = 2

# Score floors for the per-node risk band, checked top to bottom
RISK_BAND_FLOORS = [
    (80, RiskBand.CRITICAL),
    (60, RiskBand.HIGH),
    (40, RiskBand.MEDIUM),
]


def risk_band(score: int) -> RiskBand:
    """Qualitative bucket for a single risk score."""
    for floor, band in RISK_BAND_FLOORS:
        if score >= floor:
            return band
    return RiskBand.LOW


def compute_graph_stats(nodes: Sequence[Node], edges: Sequence[Edge]) -> GraphStats:
    """
    Headline counts for a node and edge set.

    Args:
        nodes: Graph nodes
        edges: Graph edges

    Returns:
        GraphStats with per-type and per-severity counts
    """
    nodes_by_type = {node_type.value: 0 for node_type in NodeType}
    for node in nodes:
        nodes_by_type[node.type.value] += 1

    return GraphStats(
        total_nodes=len(nodes),
        total_edges=len(edges),
        nodes_by_type=nodes_by_type,
        critical_count=sum(1 for n in nodes if n.severity == Severity.CRITICAL),
        high_count=sum(1 for n in nodes if n.severity == Severity.HIGH),
        average_risk=_average_risk(nodes),
    )


class InsightsEngine:
    """
    Builds the RiskInsights summary for a graph.

    Attributes:
        high_risk_threshold: Risk score at or above which a node is high-risk
        chain_limit: Maximum number of critical chains reported
        logger: Structured logger

    Example:
        >>> engine = InsightsEngine()
        >>> insights = engine.generate(nodes, edges)
        >>> print(insights.exposure_level.value, insights.critical_chains[:1])
    """

    def __init__(
        self,
        high_risk_threshold: int = HIGH_RISK_THRESHOLD,
        chain_limit: int = CHAIN_LIMIT,
    ):
        self.high_risk_threshold = high_risk_threshold
        self.chain_limit = chain_limit
        self.logger = structlog.get_logger()

    def generate(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        propagation: Optional[PropagationResult] = None,
    ) -> RiskInsights:
        """
        Summarize the graph's risk posture.

        Args:
            nodes: Graph nodes
            edges: Graph edges
            propagation: Optional active propagation result to report on

        Returns:
            RiskInsights for the graph
        """
        critical_count = sum(1 for n in nodes if n.severity == Severity.CRITICAL)
        high_risk_count = sum(
            1 for n in nodes if n.risk_score >= self.high_risk_threshold
        )
        vulnerabilities = [n for n in nodes if n.type == NodeType.VULNERABILITY]

        has_high_exposure = high_risk_count > 3 or critical_count > 0
        has_cascade_risk = self._has_cascade_risk(vulnerabilities, edges)
        exposure_level = self._classify_exposure(critical_count, high_risk_count)

        insights = RiskInsights(
            exposure_level=exposure_level,
            total_nodes=len(nodes),
            total_edges=len(edges),
            critical_count=critical_count,
            high_risk_count=high_risk_count,
            vulnerability_count=len(vulnerabilities),
            average_risk=_average_risk(nodes),
            critical_chains=self._find_critical_chains(nodes, edges),
            has_high_exposure=has_high_exposure,
            has_cascade_risk=has_cascade_risk,
            warnings=self._build_warnings(
                critical_count, high_risk_count, has_high_exposure, has_cascade_risk
            ),
            recommendations=self._build_recommendations(
                critical_count, has_high_exposure, has_cascade_risk
            ),
            propagation_alert=(
                self._build_alert(propagation) if propagation is not None else None
            ),
        )

        self.logger.debug(
            "risk_insights_generated",
            exposure_level=exposure_level.value,
            critical_count=critical_count,
            high_risk_count=high_risk_count,
            chains=len(insights.critical_chains),
            propagation_active=propagation is not None,
        )

        return insights

    # =========================================================================
    # Classification
    # =========================================================================

    def _classify_exposure(
        self, critical_count: int, high_risk_count: int
    ) -> ExposureLevel:
        if critical_count > 0:
            return ExposureLevel.CRITICAL
        if high_risk_count > 5:
            return ExposureLevel.HIGH
        if high_risk_count > 2:
            return ExposureLevel.MEDIUM
        return ExposureLevel.LOW

    def _has_cascade_risk(
        self, vulnerabilities: Sequence[Node], edges: Sequence[Edge]
    ) -> bool:
        """A vulnerability with more than two outgoing ``affected_by`` edges."""
        adjacency = AdjacencyIndex.build(edges)
        for vuln in vulnerabilities:
            affected = [
                e
                for e in adjacency.outgoing(vuln.id)
                if e.relation == RelationType.AFFECTED_BY
            ]
            if len(affected) > CASCADE_MIN_AFFECTED:
                return True
        return False

    # =========================================================================
    # Critical Chains
    # =========================================================================

    def _find_critical_chains(
        self, nodes: Sequence[Node], edges: Sequence[Edge]
    ) -> list[str]:
        node_index = index_nodes(nodes)
        adjacency = AdjacencyIndex.build(edges)
        chains: list[str] = []

        def walk(node_id: str, path: list[str], depth: int, visited: set[str]) -> None:
            if depth > CHAIN_MAX_DEPTH or node_id in visited:
                return
            visited.add(node_id)

            node = node_index.get(node_id)
            if node is None:
                return

            new_path = path + [node.name]
            outgoing = adjacency.outgoing(node_id)
            if not outgoing and len(new_path) >= CHAIN_MIN_LENGTH:
                chains.append(" → ".join(new_path))

            for edge in outgoing:
                walk(edge.target, new_path, depth + 1, visited)

        for org in (n for n in nodes if n.type == NodeType.ORGANIZATION):
            walk(org.id, [], 0, set())

        return chains[: self.chain_limit]

    # =========================================================================
    # Narrative
    # =========================================================================

    def _build_warnings(
        self,
        critical_count: int,
        high_risk_count: int,
        has_high_exposure: bool,
        has_cascade_risk: bool,
    ) -> list[str]:
        warnings = []
        if critical_count > 0:
            noun = "vulnerability" if critical_count == 1 else "vulnerabilities"
            warnings.append(f"{critical_count} critical {noun} detected")
        if has_high_exposure:
            warnings.append(
                f"High systemic exposure detected across {high_risk_count} high-risk nodes"
            )
        if has_cascade_risk:
            warnings.append(
                "Cascade risk scenario likely: vulnerabilities affect multiple organizations"
            )
        return warnings

    def _build_recommendations(
        self,
        critical_count: int,
        has_high_exposure: bool,
        has_cascade_risk: bool,
    ) -> list[str]:
        recommendations = []
        if critical_count > 0:
            noun = "vulnerability" if critical_count == 1 else "vulnerabilities"
            recommendations.append(f"Prioritize patching {critical_count} critical {noun}")
        if has_high_exposure:
            recommendations.append("Conduct deep-dive audit on high-risk suppliers")
        if has_cascade_risk:
            recommendations.append("Implement additional controls for cascade scenarios")
        recommendations.append("Review supply chain contracts for security clauses")
        return recommendations

    def _build_alert(self, propagation: PropagationResult) -> PropagationAlert:
        count = propagation.affected_count
        noun = "entity" if count == 1 else "entities"
        return PropagationAlert(
            source_id=propagation.source_id,
            affected_count=count,
            impact_level=propagation.impact_level,
            message=f"{count} {noun} affected, {propagation.impact_level.value} impact",
        )


def generate_insights(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    propagation: Optional[PropagationResult] = None,
) -> RiskInsights:
    """Functional entry point: ``InsightsEngine().generate(...)``."""
    return InsightsEngine().generate(nodes, edges, propagation)


def _average_risk(nodes: Sequence[Node]) -> int:
    """Mean risk score rounded half-up; 0 for no nodes."""
    if not nodes:
        return 0
    return int(math.floor(sum(n.risk_score for n in nodes) / len(nodes) + 0.5))
