"""
Risk Propagation Engine.

This module simulates how risk spreads from one entity of the supply-chain
graph to the entities that depend on it or are affected by it.

Components:
    AdjacencyIndex: Per-call forward/reverse edge lookups
    ImpactClassifier: Waterfall impact classification with critical override
    RiskPropagator: Bounded BFS producing a PropagationResult

Example:
    >>> from securechain.engine.propagation import propagate
    >>> result = propagate("vuln_cve2021_44228", nodes, edges, max_depth=1)
    >>> print(f"{result.affected_count} affected, {result.impact_level.value} impact")
"""

from .adjacency import AdjacencyIndex, index_nodes
from .impact_classifier import IMPACT_THRESHOLDS, ImpactClassifier
from .propagator import RiskPropagator, propagate

__all__ = [
    "AdjacencyIndex",
    "IMPACT_THRESHOLDS",
    "ImpactClassifier",
    "RiskPropagator",
    "index_nodes",
    "propagate",
]
