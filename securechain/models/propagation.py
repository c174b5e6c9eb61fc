"""
Risk propagation result models.

A ``PropagationResult`` is built fresh for every (source, depth) request and
is never mutated afterwards; the API layer, the insights engine and the demo
script all read the same instance.
"""

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import ImpactLevel, RelationType
from .graph import Edge


class PropagationResult(BaseModel):
    """
    Outcome of one bounded risk propagation run.

    Attributes:
        source_id: Node the risk event starts from
        max_depth: Hop limit the traversal ran with
        affected_nodes: Reached node ids in discovery order, source first
        propagation_paths: Shortest path (source first) to every non-source node
        impact_level: Qualitative classification of the outcome
        affected_count: Number of affected nodes excluding the source
        average_risk: Mean risk score over the affected set, source included
        truncated: True when a node-visit budget stopped discovery early
    """

    model_config = ConfigDict(frozen=True)

    source_id: str = Field(description="Propagation source node id")
    max_depth: int = Field(description="Hop limit used for the traversal")
    affected_nodes: list[str] = Field(
        description="Affected node ids in BFS discovery order (source first)"
    )
    propagation_paths: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Path from the source to each non-source affected node",
    )
    impact_level: ImpactLevel = Field(description="Impact classification")
    affected_count: int = Field(ge=0, description="Affected nodes excluding the source")
    average_risk: float = Field(ge=0.0, description="Mean risk over the affected set")
    truncated: bool = Field(default=False, description="Visit budget exhausted")

    @model_validator(mode="after")
    def validate_containment(self) -> "PropagationResult":
        """Source leads the affected list and the count excludes it."""
        if not self.affected_nodes or self.affected_nodes[0] != self.source_id:
            raise ValueError("affected_nodes must start with the source id")
        if self.affected_count != len(self.affected_nodes) - 1:
            raise ValueError("affected_count must exclude the source")
        return self

    def is_affected(self, node_id: str) -> bool:
        """Whether ``node_id`` was reached by the propagation."""
        return node_id in self.affected_nodes

    def hop_count(self, node_id: str) -> Optional[int]:
        """
        Hops from the source to ``node_id``.

        Returns 0 for the source itself and None for nodes that were not
        reached.
        """
        if node_id == self.source_id:
            return 0
        path = self.propagation_paths.get(node_id)
        if path is None:
            return None
        return len(path) - 1

    def affected_edges(self, edges: Iterable[Edge]) -> list[Edge]:
        """
        Edges that carried risk along one of the recorded paths.

        A step ``a -> b`` in a path comes either from an edge ``b -> a`` (risk
        flowing back to a dependent) or from an ``affected_by`` edge
        ``a -> b``.
        """
        steps: set[tuple[str, str]] = set()
        for path in self.propagation_paths.values():
            steps.update(zip(path, path[1:]))

        return [
            edge
            for edge in edges
            if (edge.target, edge.source) in steps
            or (
                edge.relation == RelationType.AFFECTED_BY
                and (edge.source, edge.target) in steps
            )
        ]
