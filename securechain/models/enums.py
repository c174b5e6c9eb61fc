"""
Enumeration types for the supply-chain risk graph.

All enums inherit from str to ensure JSON serialization compatibility and
so that members compare equal to their raw string values.
"""

from enum import Enum


class NodeType(str, Enum):
    """
    Entity kinds that appear in the supply-chain graph.
    """

    ORGANIZATION = "organization"
    PRODUCT = "product"
    SOFTWARE = "software"
    VULNERABILITY = "vulnerability"


class RelationType(str, Enum):
    """
    Directed relationships between graph entities.

    ``AFFECTED_BY`` is the only relation that carries risk along its own
    direction during propagation; every other relation carries risk from
    target back to source.
    """

    USES = "uses"
    DEPENDS_ON = "depends_on"
    AFFECTED_BY = "affected_by"
    SUPPLIES_TO = "supplies_to"


class Severity(str, Enum):
    """
    Severity attached to an individual node (typically a vulnerability).
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ImpactLevel(str, Enum):
    """
    Qualitative classification of a propagation outcome.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ExposureLevel(str, Enum):
    """
    Graph-wide risk posture reported by the insights engine.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskBand(str, Enum):
    """
    Qualitative bucket for a single node's risk score.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# Sentinel accepted by the view projection in place of a NodeType.
ALL_TYPES = "all"
