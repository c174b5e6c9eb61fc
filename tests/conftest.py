"""
Pytest configuration and shared fixtures for the SecureChain test suite.

Provides node/edge factories, the sample supply-chain graph, small
hand-built graphs for traversal edge cases, and a FastAPI test client.
"""

import os
from typing import Optional

import pytest
from fastapi.testclient import TestClient

# Use the built-in sample graph unless a test configures otherwise
os.environ.pop("GRAPH_DATA_PATH", None)

from securechain.config import get_settings
from securechain.models.enums import NodeType, RelationType, Severity
from securechain.models.graph import Edge, GraphData, Node
from securechain.storage import StaticGraphSource, get_graph_source


# ---------------------------------------------------------------------------
# Pydantic model factories: reusable across all test suites
# ---------------------------------------------------------------------------


def make_node(
    node_id: str = "node_a",
    node_type: NodeType = NodeType.SOFTWARE,
    risk_score: int = 50,
    severity: Optional[Severity] = None,
    **overrides,
) -> Node:
    """Factory function for creating test Node objects."""
    defaults = dict(
        id=node_id,
        type=node_type,
        name=node_id.replace("_", " ").title(),
        risk_score=risk_score,
        severity=severity,
    )
    defaults.update(overrides)
    return Node(**defaults)


def make_edge(
    source: str = "node_a",
    target: str = "node_b",
    relation: RelationType = RelationType.DEPENDS_ON,
    **overrides,
) -> Edge:
    """Factory function for creating test Edge objects."""
    defaults = dict(source=source, target=target, relation=relation)
    defaults.update(overrides)
    return Edge(**defaults)


def make_chain(
    node_ids: list[str],
    relation: RelationType = RelationType.DEPENDS_ON,
    risk_score: int = 50,
) -> tuple[list[Node], list[Edge]]:
    """
    Nodes n0..nk with edges n(i+1) -> n(i), so risk flows from n0 outward.
    """
    nodes = [make_node(node_id, risk_score=risk_score) for node_id in node_ids]
    edges = [
        make_edge(node_ids[i + 1], node_ids[i], relation)
        for i in range(len(node_ids) - 1)
    ]
    return nodes, edges


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_graph() -> GraphData:
    """The built-in 24-node sample supply-chain graph."""
    return StaticGraphSource().load()


@pytest.fixture
def sample_nodes(sample_graph) -> list[Node]:
    return sample_graph.nodes


@pytest.fixture
def sample_edges(sample_graph) -> list[Edge]:
    return sample_graph.edges


@pytest.fixture
def cycle_graph() -> tuple[list[Node], list[Edge]]:
    """A -> B -> C -> A, all depends_on."""
    nodes = [make_node("A", risk_score=40), make_node("B", risk_score=60), make_node("C", risk_score=80)]
    edges = [
        make_edge("A", "B"),
        make_edge("B", "C"),
        make_edge("C", "A"),
    ]
    return nodes, edges


@pytest.fixture
def diamond_graph() -> tuple[list[Node], list[Edge]]:
    """
    Two routes from S to T of different lengths:
    T depends on X, X depends on S, and T also depends on S directly
    through a later edge.
    """
    nodes = [make_node(n) for n in ("S", "X", "T")]
    edges = [
        make_edge("X", "S"),
        make_edge("T", "X"),
        make_edge("T", "S"),
    ]
    return nodes, edges


@pytest.fixture
def reset_caches():
    """Clear cached settings and graph source before and after a test."""
    get_settings.cache_clear()
    get_graph_source.cache_clear()
    yield
    get_settings.cache_clear()
    get_graph_source.cache_clear()


@pytest.fixture
def client():
    """FastAPI test client for integration tests."""
    from securechain.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def request_headers():
    """Request headers carrying a fixed request id."""
    return {"X-Request-ID": "test-request-0001"}
