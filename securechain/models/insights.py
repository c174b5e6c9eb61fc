"""
Graph statistics and risk insight models.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .enums import ExposureLevel, ImpactLevel


class GraphStats(BaseModel):
    """
    Headline counts for a node and edge set.

    Attributes:
        total_nodes: Number of nodes
        total_edges: Number of edges
        nodes_by_type: Node count per node type (every type present, zero if absent)
        critical_count: Nodes whose severity is critical
        high_count: Nodes whose severity is high
        average_risk: Mean risk score rounded half-up (0 for an empty graph)
    """

    total_nodes: int = Field(ge=0)
    total_edges: int = Field(ge=0)
    nodes_by_type: dict[str, int] = Field(default_factory=dict)
    critical_count: int = Field(ge=0)
    high_count: int = Field(ge=0)
    average_risk: int = Field(ge=0, le=100)


class PropagationAlert(BaseModel):
    """
    Summary of an active propagation simulation, shown alongside insights.
    """

    source_id: str
    affected_count: int = Field(ge=0)
    impact_level: ImpactLevel
    message: str


class RiskInsights(BaseModel):
    """
    Graph-wide risk posture with derived warnings and recommended actions.
    """

    exposure_level: ExposureLevel
    total_nodes: int = Field(ge=0)
    total_edges: int = Field(ge=0)
    critical_count: int = Field(ge=0)
    high_risk_count: int = Field(ge=0)
    vulnerability_count: int = Field(ge=0)
    average_risk: int = Field(ge=0, le=100)
    critical_chains: list[str] = Field(default_factory=list)
    has_high_exposure: bool = False
    has_cascade_risk: bool = False
    warnings: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    propagation_alert: Optional[PropagationAlert] = None
