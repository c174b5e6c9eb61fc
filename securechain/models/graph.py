"""
Graph models for the supply-chain risk graph.

Nodes and edges are frozen once constructed: the propagation engine and the
analysis utilities only ever read them. ``GraphData`` is the unit handed out
by graph sources; ``GraphView`` is the derived subgraph returned by the view
projection.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import NodeType, RelationType, Severity


class Node(BaseModel):
    """
    A single entity in the supply-chain graph.

    Attributes:
        id: Globally unique node key
        type: Entity kind
        name: Display name
        risk_score: Integer risk score in [0, 100]
        severity: Optional severity, mostly set on vulnerabilities
        vendor: Optional vendor name
        version: Optional version string
        affected_systems: Optional count of systems exposed
        description: Optional free-text description
        exposure_level: Optional free-text exposure label from the data source
        last_updated: Optional timestamp string from the data source
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Globally unique node key")
    type: NodeType = Field(description="Entity kind")
    name: str = Field(description="Display name")
    risk_score: int = Field(ge=0, le=100, description="Risk score in [0, 100]")
    severity: Optional[Severity] = Field(default=None, description="Node severity")
    vendor: Optional[str] = Field(default=None, description="Vendor name")
    version: Optional[str] = Field(default=None, description="Version string")
    affected_systems: Optional[int] = Field(
        default=None, ge=0, description="Count of affected systems"
    )
    description: Optional[str] = Field(default=None, description="Free-text description")
    exposure_level: Optional[str] = Field(default=None, description="Exposure label")
    last_updated: Optional[str] = Field(default=None, description="Last update timestamp")


class Edge(BaseModel):
    """
    A directed, typed relationship between two nodes.

    Endpoints are plain ids and are not checked against any node set here:
    traversal tolerates dangling endpoints.
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Source node id")
    target: str = Field(description="Target node id")
    relation: RelationType = Field(description="Relationship type")
    confidence: Optional[float] = Field(
        default=None, ge=0.0, le=1.0, description="Confidence in the relationship"
    )
    impact_score: Optional[float] = Field(
        default=None, ge=0.0, le=100.0, description="Presentation weighting hint"
    )


class GraphData(BaseModel):
    """
    A complete node and edge set as loaded from a graph source.
    """

    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_node_ids(self) -> "GraphData":
        """Reject node sets that reuse an id."""
        seen: set[str] = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"Duplicate node id: {node.id}")
            seen.add(node.id)
        return self

    def get_node(self, node_id: str) -> Optional[Node]:
        """Return the node with ``node_id``, or None."""
        return next((n for n in self.nodes if n.id == node_id), None)


class GraphView(BaseModel):
    """
    Subgraph selected by the type and minimum-risk filters.
    """

    filter_type: str = Field(description="'all' or a node type")
    min_risk: int = Field(description="Minimum risk score applied")
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)


class NodeConnections(BaseModel):
    """
    Edges touching one node, split by direction.
    """

    node_id: str
    incoming: list[Edge] = Field(default_factory=list)
    outgoing: list[Edge] = Field(default_factory=list)


class DependencyTreeNode(BaseModel):
    """
    One level of the dependency tree built from outgoing edges.
    """

    node: Node
    children: list["DependencyTreeNode"] = Field(default_factory=list)

    def size(self) -> int:
        """Number of nodes in this subtree, itself included."""
        return 1 + sum(child.size() for child in self.children)


DependencyTreeNode.model_rebuild()
