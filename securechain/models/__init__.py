"""
Pydantic v2 data models for the SecureChain risk engine.

Model Organization:
    - enums: Enumeration types for consistent classification
    - graph: Nodes, edges, graph data, projections, connections and trees
    - propagation: Risk propagation results
    - insights: Graph statistics and risk insights

Usage:
    >>> from securechain.models import Edge, Node, NodeType, RelationType
    >>> node = Node(id="software_log4j", type=NodeType.SOFTWARE, name="Log4j", risk_score=85)
    >>> edge = Edge(
    ...     source="software_log4j",
    ...     target="vuln_cve2021_44228",
    ...     relation=RelationType.AFFECTED_BY,
    ... )
"""

# Enumerations
from .enums import (
    ALL_TYPES,
    ExposureLevel,
    ImpactLevel,
    NodeType,
    RelationType,
    RiskBand,
    Severity,
)

# Graph models
from .graph import (
    DependencyTreeNode,
    Edge,
    GraphData,
    GraphView,
    Node,
    NodeConnections,
)

# Propagation models
from .propagation import PropagationResult

# Insight models
from .insights import GraphStats, PropagationAlert, RiskInsights

__all__ = [
    # Enumerations
    "ALL_TYPES",
    "ExposureLevel",
    "ImpactLevel",
    "NodeType",
    "RelationType",
    "RiskBand",
    "Severity",
    # Graph models
    "DependencyTreeNode",
    "Edge",
    "GraphData",
    "GraphView",
    "Node",
    "NodeConnections",
    # Propagation models
    "PropagationResult",
    # Insight models
    "GraphStats",
    "PropagationAlert",
    "RiskInsights",
]
