"""
SecureChain risk engine components.

This package contains the analytical core of the SecureChain service:

- Risk propagation: bounded BFS over the supply-chain graph with impact
  classification
- Centrality: degree and risk-weighted connectedness metrics
- Projection: type and minimum-risk filtered subgraphs
- Insights: graph statistics, exposure level, critical chains
- Search and dependency trees for graph exploration

All engine components are pure functions of their inputs: they never
mutate the graph and hold no state between calls.
"""

from securechain.engine.centrality import (
    degree_centrality,
    rank_nodes,
    risk_weighted_centrality,
)
from securechain.engine.insights import (
    InsightsEngine,
    compute_graph_stats,
    generate_insights,
    risk_band,
)
from securechain.engine.projection import project_graph
from securechain.engine.propagation import RiskPropagator, propagate
from securechain.engine.search import search_nodes
from securechain.engine.tree_builder import build_dependency_tree

__all__ = [
    "InsightsEngine",
    "RiskPropagator",
    "build_dependency_tree",
    "compute_graph_stats",
    "degree_centrality",
    "generate_insights",
    "project_graph",
    "propagate",
    "rank_nodes",
    "risk_band",
    "risk_weighted_centrality",
    "search_nodes",
]
