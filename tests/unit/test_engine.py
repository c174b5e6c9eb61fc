"""
Unit tests for the SecureChain engine modules.

Naming: test_<module>_<method>_<scenario>. Each test builds its own inputs;
fixtures only provide immutable graphs.
"""

import pytest

from securechain.engine.centrality import (
    degree_centrality,
    rank_nodes,
    risk_weighted_centrality,
)
from securechain.engine.projection import project_graph
from securechain.engine.propagation import (
    AdjacencyIndex,
    ImpactClassifier,
    RiskPropagator,
    index_nodes,
    propagate,
)
from securechain.engine.search import search_nodes
from securechain.engine.tree_builder import build_dependency_tree
from securechain.models.enums import ImpactLevel, NodeType, RelationType, Severity
from tests.conftest import make_chain, make_edge, make_node


# ============================================================================
# AdjacencyIndex Tests
# ============================================================================


class TestAdjacencyIndex:
    """Test forward/reverse edge indexing."""

    def test_adjacency_incoming_preserves_edge_order(self, sample_edges):
        index = AdjacencyIndex.build(sample_edges)
        sources = [e.source for e in index.incoming("software_log4j")]
        assert sources == ["product_veeam", "product_jenkins"]

    def test_adjacency_outgoing_preserves_edge_order(self, sample_edges):
        index = AdjacencyIndex.build(sample_edges)
        targets = [e.target for e in index.outgoing("org_micrologic")]
        assert targets == ["org_cloudserve", "product_veeam", "product_jenkins"]

    def test_adjacency_unknown_id_returns_empty(self, sample_edges):
        index = AdjacencyIndex.build(sample_edges)
        assert index.incoming("does_not_exist") == []
        assert index.outgoing("does_not_exist") == []

    def test_adjacency_empty_edge_list(self):
        index = AdjacencyIndex.build([])
        assert index.incoming("a") == []

    def test_adjacency_parallel_edges_kept_independently(self):
        edges = [
            make_edge("a", "b", RelationType.USES),
            make_edge("a", "b", RelationType.DEPENDS_ON),
        ]
        index = AdjacencyIndex.build(edges)
        assert [e.relation for e in index.outgoing("a")] == [
            RelationType.USES,
            RelationType.DEPENDS_ON,
        ]
        assert len(index.incoming("b")) == 2

    def test_adjacency_connections_splits_directions(self, sample_edges):
        connections = AdjacencyIndex.build(sample_edges).connections("software_log4j")
        assert connections.node_id == "software_log4j"
        assert len(connections.incoming) == 2
        assert [e.target for e in connections.outgoing] == ["vuln_cve2021_44228"]

    def test_index_nodes_first_duplicate_wins(self):
        nodes = [make_node("a", risk_score=10), make_node("a", risk_score=90)]
        assert index_nodes(nodes)["a"].risk_score == 10


# ============================================================================
# ImpactClassifier Tests
# ============================================================================


class TestImpactClassifier:
    """Test the waterfall impact classification."""

    @pytest.mark.parametrize(
        "affected_count, average_risk, expected",
        [
            (0, 99.0, ImpactLevel.LOW),
            (2, 49.9, ImpactLevel.LOW),
            (2, 50.0, ImpactLevel.MEDIUM),
            (4, 69.9, ImpactLevel.MEDIUM),
            (3, 10.0, ImpactLevel.MEDIUM),
            (4, 70.0, ImpactLevel.HIGH),
            (1, 90.0, ImpactLevel.HIGH),
            (9, 99.0, ImpactLevel.HIGH),
            (50, 79.9, ImpactLevel.HIGH),
            (10, 80.0, ImpactLevel.CRITICAL),
        ],
    )
    def test_classify_thresholds(self, affected_count, average_risk, expected):
        classifier = ImpactClassifier()
        assert classifier.classify(affected_count, average_risk) == expected

    def test_classify_critical_source_overrides(self):
        classifier = ImpactClassifier()
        level = classifier.classify(1, 10.0, source_severity=Severity.CRITICAL)
        assert level == ImpactLevel.CRITICAL

    def test_classify_critical_source_without_spread_stays_low(self):
        classifier = ImpactClassifier()
        level = classifier.classify(0, 99.0, source_severity=Severity.CRITICAL)
        assert level == ImpactLevel.LOW

    def test_classify_high_severity_source_no_override(self):
        classifier = ImpactClassifier()
        level = classifier.classify(1, 10.0, source_severity=Severity.HIGH)
        assert level == ImpactLevel.LOW


# ============================================================================
# RiskPropagator Tests
# ============================================================================


class TestRiskPropagatorSampleGraph:
    """Propagation on the built-in sample graph."""

    def test_propagate_vulnerability_depth_one(self, sample_nodes, sample_edges):
        result = propagate("vuln_cve2021_44228", sample_nodes, sample_edges, 1)
        assert result.affected_nodes == ["vuln_cve2021_44228", "software_log4j"]
        assert result.affected_count == 1
        assert result.average_risk == pytest.approx(90.0)
        assert result.impact_level == ImpactLevel.HIGH

    def test_propagate_vulnerability_depth_two(self, sample_nodes, sample_edges):
        result = propagate("vuln_cve2021_44228", sample_nodes, sample_edges, 2)
        assert result.affected_nodes == [
            "vuln_cve2021_44228",
            "software_log4j",
            "product_veeam",
            "product_jenkins",
        ]
        assert result.affected_count == 3
        assert result.propagation_paths["product_veeam"] == [
            "vuln_cve2021_44228",
            "software_log4j",
            "product_veeam",
        ]
        assert result.impact_level == ImpactLevel.HIGH

    def test_propagate_vulnerability_reaches_organizations(self, sample_nodes, sample_edges):
        result = propagate("vuln_cve2021_44228", sample_nodes, sample_edges, 4)
        assert result.affected_count == 5
        assert result.propagation_paths["org_mtl"] == [
            "vuln_cve2021_44228",
            "software_log4j",
            "product_veeam",
            "org_micrologic",
            "org_mtl",
        ]

    def test_propagate_depth_zero_source_only(self, sample_nodes, sample_edges):
        result = propagate("org_mtl", sample_nodes, sample_edges, 0)
        assert result.affected_nodes == ["org_mtl"]
        assert result.affected_count == 0
        assert result.propagation_paths == {}
        assert result.impact_level == ImpactLevel.LOW

    def test_propagate_software_follows_affected_by(self, sample_nodes, sample_edges):
        result = propagate("software_openssl", sample_nodes, sample_edges, 1)
        assert result.affected_nodes == [
            "software_openssl",
            "product_veeam",
            "product_docker",
            "product_postgres",
            "vuln_cve2024_1234",
        ]
        assert result.average_risk == pytest.approx(56.6)
        assert result.impact_level == ImpactLevel.MEDIUM

    def test_propagate_root_organization_has_no_dependents(self, sample_nodes, sample_edges):
        result = propagate("org_mtl", sample_nodes, sample_edges, 3)
        assert result.affected_count == 0
        assert result.impact_level == ImpactLevel.LOW

    def test_propagate_source_has_no_path_entry(self, sample_nodes, sample_edges):
        result = propagate("vuln_cve2021_44228", sample_nodes, sample_edges, 3)
        assert "vuln_cve2021_44228" not in result.propagation_paths
        assert result.hop_count("vuln_cve2021_44228") == 0


class TestRiskPropagatorTraversal:
    """Traversal rules and edge cases on hand-built graphs."""

    def test_propagate_cycle_terminates(self, cycle_graph):
        nodes, edges = cycle_graph
        result = propagate("A", nodes, edges, 5)
        assert sorted(result.affected_nodes) == ["A", "B", "C"]
        assert len(result.affected_nodes) == len(set(result.affected_nodes))

    def test_propagate_two_node_cycle(self):
        nodes = [make_node("A"), make_node("B")]
        edges = [make_edge("A", "B"), make_edge("B", "A")]
        result = propagate("A", nodes, edges, 5)
        assert result.affected_nodes == ["A", "B"]
        assert result.propagation_paths == {"B": ["A", "B"]}

    def test_propagate_records_shortest_path(self, diamond_graph):
        nodes, edges = diamond_graph
        result = propagate("S", nodes, edges, 3)
        assert result.propagation_paths["T"] == ["S", "T"]
        assert result.propagation_paths["X"] == ["S", "X"]

    def test_propagate_ties_broken_by_edge_order(self):
        nodes = [make_node(n) for n in ("S", "A", "B", "T")]
        edges = [
            make_edge("A", "S"),
            make_edge("B", "S"),
            make_edge("T", "B"),
            make_edge("T", "A"),
        ]
        result = propagate("S", nodes, edges, 3)
        # A is dequeued before B, so T is first reached through A
        assert result.propagation_paths["T"] == ["S", "A", "T"]

    def test_propagate_ignores_outgoing_non_affected_by(self):
        nodes = [make_node("S"), make_node("Y"), make_node("V", NodeType.VULNERABILITY)]
        edges = [
            make_edge("S", "Y", RelationType.USES),
            make_edge("S", "V", RelationType.AFFECTED_BY),
        ]
        result = propagate("S", nodes, edges, 2)
        assert result.affected_nodes == ["S", "V"]

    def test_propagate_incoming_before_affected_by(self):
        nodes = [make_node(n) for n in ("S", "D", "V")]
        edges = [
            make_edge("S", "V", RelationType.AFFECTED_BY),
            make_edge("D", "S", RelationType.DEPENDS_ON),
        ]
        result = propagate("S", nodes, edges, 1)
        assert result.affected_nodes == ["S", "D", "V"]

    def test_propagate_parallel_edges_add_node_once(self):
        nodes = [make_node("S"), make_node("X")]
        edges = [
            make_edge("X", "S", RelationType.USES),
            make_edge("X", "S", RelationType.DEPENDS_ON),
        ]
        result = propagate("S", nodes, edges, 2)
        assert result.affected_nodes == ["S", "X"]

    def test_propagate_self_loop(self):
        result = propagate("A", [make_node("A")], [make_edge("A", "A")], 3)
        assert result.affected_nodes == ["A"]
        assert result.affected_count == 0

    def test_propagate_depth_bound_on_chain(self):
        nodes, edges = make_chain(["n0", "n1", "n2", "n3", "n4"])
        result = propagate("n0", nodes, edges, 2)
        assert result.affected_nodes == ["n0", "n1", "n2"]
        assert max(len(p) for p in result.propagation_paths.values()) == 3


class TestRiskPropagatorDegradation:
    """Malformed input degrades gracefully instead of raising."""

    def test_propagate_unknown_source_no_edges(self, sample_nodes, sample_edges):
        result = propagate("ghost", sample_nodes, sample_edges, 3)
        assert result.affected_nodes == ["ghost"]
        assert result.affected_count == 0
        assert result.average_risk == 0.0
        assert result.impact_level == ImpactLevel.LOW

    def test_propagate_unknown_source_with_edges_scores_zero(self):
        nodes = [make_node("X", risk_score=60)]
        edges = [make_edge("X", "ghost")]
        result = propagate("ghost", nodes, edges, 1)
        assert result.affected_nodes == ["ghost", "X"]
        assert result.average_risk == pytest.approx(30.0)
        assert result.impact_level == ImpactLevel.LOW

    def test_propagate_dangling_endpoint_added_with_zero_risk(self):
        nodes = [make_node("A", risk_score=50)]
        edges = [make_edge("phantom", "A")]
        result = propagate("A", nodes, edges, 1)
        assert result.affected_nodes == ["A", "phantom"]
        assert result.average_risk == pytest.approx(25.0)

    def test_propagate_negative_depth(self, sample_nodes, sample_edges):
        result = propagate("software_log4j", sample_nodes, sample_edges, -1)
        assert result.affected_nodes == ["software_log4j"]
        assert result.propagation_paths == {}

    def test_propagate_empty_graph(self):
        result = propagate("a", [], [], 3)
        assert result.affected_nodes == ["a"]
        assert result.average_risk == 0.0

    def test_propagate_does_not_mutate_inputs(self, sample_nodes, sample_edges):
        nodes_before = [n.model_dump() for n in sample_nodes]
        edges_before = [e.model_dump() for e in sample_edges]
        propagate("vuln_cve2021_44228", sample_nodes, sample_edges, 3)
        assert [n.model_dump() for n in sample_nodes] == nodes_before
        assert [e.model_dump() for e in sample_edges] == edges_before


class TestRiskPropagatorSeverityOverride:
    """A critical-severity source forces CRITICAL impact."""

    def test_propagate_critical_source_with_dependent(self):
        nodes = [
            make_node("V", NodeType.VULNERABILITY, risk_score=10, severity=Severity.CRITICAL),
            make_node("S", risk_score=10),
        ]
        edges = [make_edge("S", "V", RelationType.AFFECTED_BY)]
        result = propagate("V", nodes, edges, 1)
        assert result.affected_count == 1
        assert result.impact_level == ImpactLevel.CRITICAL

    def test_propagate_critical_source_isolated(self):
        nodes = [make_node("V", NodeType.VULNERABILITY, severity=Severity.CRITICAL)]
        result = propagate("V", nodes, [], 3)
        assert result.impact_level == ImpactLevel.LOW


class TestRiskPropagatorVisitBudget:
    """The optional node-visit budget."""

    def test_budget_caps_affected_count(self):
        nodes, edges = make_chain(["n0", "n1", "n2", "n3", "n4", "n5"])
        result = RiskPropagator(max_visits=2).propagate("n0", nodes, edges, 10)
        assert result.affected_count == 2
        assert result.truncated is True

    def test_budget_not_reached_not_truncated(self):
        nodes, edges = make_chain(["n0", "n1", "n2"])
        result = RiskPropagator(max_visits=2).propagate("n0", nodes, edges, 10)
        assert result.affected_count == 2
        assert result.truncated is False

    def test_no_budget_by_default(self):
        nodes, edges = make_chain([f"n{i}" for i in range(30)])
        result = RiskPropagator().propagate("n0", nodes, edges, 100)
        assert result.affected_count == 29
        assert result.truncated is False


# ============================================================================
# PropagationResult Tests
# ============================================================================


class TestPropagationResult:
    """Helpers on the result model."""

    def test_hop_count_unreached_is_none(self, sample_nodes, sample_edges):
        result = propagate("vuln_cve2021_44228", sample_nodes, sample_edges, 1)
        assert result.hop_count("org_mtl") is None
        assert result.hop_count("software_log4j") == 1

    def test_is_affected(self, sample_nodes, sample_edges):
        result = propagate("vuln_cve2021_44228", sample_nodes, sample_edges, 1)
        assert result.is_affected("software_log4j")
        assert not result.is_affected("product_veeam")

    def test_affected_edges_follow_paths(self, sample_nodes, sample_edges):
        result = propagate("vuln_cve2021_44228", sample_nodes, sample_edges, 2)
        pairs = [(e.source, e.target) for e in result.affected_edges(sample_edges)]
        assert pairs == [
            ("product_veeam", "software_log4j"),
            ("product_jenkins", "software_log4j"),
            ("software_log4j", "vuln_cve2021_44228"),
        ]

    def test_affected_edges_forward_affected_by(self):
        nodes = [make_node("S"), make_node("V", NodeType.VULNERABILITY)]
        edges = [make_edge("S", "V", RelationType.AFFECTED_BY)]
        result = propagate("S", nodes, edges, 1)
        assert result.affected_edges(edges) == edges

    def test_result_rejects_inconsistent_count(self):
        from pydantic import ValidationError

        from securechain.models.propagation import PropagationResult

        with pytest.raises(ValidationError):
            PropagationResult(
                source_id="a",
                max_depth=1,
                affected_nodes=["a", "b"],
                impact_level=ImpactLevel.LOW,
                affected_count=2,
                average_risk=0.0,
            )


# ============================================================================
# Centrality Tests
# ============================================================================


class TestDegreeCentrality:
    """Multigraph-style endpoint counting."""

    def test_degree_sample_graph(self, sample_nodes, sample_edges):
        centrality = degree_centrality(sample_nodes, sample_edges)
        assert centrality["software_log4j"] == 3
        assert centrality["org_micrologic"] == 4
        assert centrality["software_jackson"] == 0

    def test_degree_sums_to_twice_edge_count(self, sample_nodes, sample_edges):
        centrality = degree_centrality(sample_nodes, sample_edges)
        assert sum(centrality.values()) == 2 * len(sample_edges)

    def test_degree_self_loop_counts_twice(self):
        centrality = degree_centrality([make_node("A")], [make_edge("A", "A")])
        assert centrality == {"A": 2}

    def test_degree_parallel_edges_each_count(self):
        nodes = [make_node("A"), make_node("B")]
        edges = [
            make_edge("A", "B", RelationType.USES),
            make_edge("A", "B", RelationType.DEPENDS_ON),
        ]
        assert degree_centrality(nodes, edges) == {"A": 2, "B": 2}

    def test_degree_includes_dangling_ids_after_nodes(self):
        centrality = degree_centrality([make_node("A")], [make_edge("A", "ghost")])
        assert list(centrality) == ["A", "ghost"]
        assert centrality["ghost"] == 1


class TestRiskWeightedCentrality:
    """Neighbor count weighted by neighbor risk."""

    def test_risk_weighted_basic(self):
        nodes = [make_node("A", risk_score=50), make_node("B", risk_score=100)]
        scores = risk_weighted_centrality(nodes, [make_edge("A", "B")])
        assert scores["A"] == pytest.approx(2.0)
        assert scores["B"] == pytest.approx(1.5)

    def test_risk_weighted_isolated_node_zero(self):
        scores = risk_weighted_centrality([make_node("C")], [])
        assert scores == {"C": 0.0}

    def test_risk_weighted_neighbors_are_distinct(self):
        nodes = [make_node("A", risk_score=50), make_node("B", risk_score=100)]
        edges = [make_edge("A", "B"), make_edge("B", "A"), make_edge("A", "B", RelationType.USES)]
        scores = risk_weighted_centrality(nodes, edges)
        assert scores["A"] == pytest.approx(2.0)

    def test_risk_weighted_dangling_neighbor_zero_risk(self):
        scores = risk_weighted_centrality([make_node("A")], [make_edge("A", "ghost")])
        assert scores == {"A": pytest.approx(1.0)}

    def test_risk_weighted_sample_log4j(self, sample_nodes, sample_edges):
        scores = risk_weighted_centrality(sample_nodes, sample_edges)
        expected = 3 * (1 + ((65 + 58 + 95) / 3) / 100)
        assert scores["software_log4j"] == pytest.approx(expected)


class TestRankNodes:
    def test_rank_nodes_orders_by_score_then_id(self):
        ranked = rank_nodes({"b": 2, "a": 2, "c": 5})
        assert ranked == [("c", 5), ("a", 2), ("b", 2)]

    def test_rank_nodes_limit(self):
        assert rank_nodes({"b": 2, "a": 2, "c": 5}, limit=1) == [("c", 5)]


# ============================================================================
# Projection Tests
# ============================================================================


class TestProjectGraph:
    """Type and minimum-risk filtering."""

    def test_project_all_keeps_everything(self, sample_nodes, sample_edges):
        view = project_graph(sample_nodes, sample_edges)
        assert len(view.nodes) == 24
        assert len(view.edges) == 26
        assert view.filter_type == "all"

    def test_project_by_type(self, sample_nodes, sample_edges):
        view = project_graph(sample_nodes, sample_edges, NodeType.VULNERABILITY)
        assert len(view.nodes) == 5
        assert view.edges == []

    def test_project_accepts_type_string(self, sample_nodes, sample_edges):
        view = project_graph(sample_nodes, sample_edges, "product")
        assert len(view.nodes) == 7
        assert view.filter_type == "product"

    def test_project_min_risk(self, sample_nodes, sample_edges):
        view = project_graph(sample_nodes, sample_edges, min_risk=70)
        assert [n.id for n in view.nodes] == [
            "org_micrologic",
            "software_log4j",
            "vuln_cve2021_44228",
            "vuln_cve2024_1234",
            "vuln_cve2024_5678",
            "vuln_cve2025_9999",
            "vuln_cve2024_3333",
        ]
        assert [(e.source, e.target) for e in view.edges] == [
            ("software_log4j", "vuln_cve2021_44228")
        ]

    def test_project_type_and_risk_combined(self, sample_nodes, sample_edges):
        view = project_graph(sample_nodes, sample_edges, NodeType.SOFTWARE, 50)
        assert {n.id for n in view.nodes} == {
            "software_log4j",
            "software_openssl",
            "software_spring",
            "software_tomcat",
        }

    def test_project_unknown_type_raises(self, sample_nodes, sample_edges):
        with pytest.raises(ValueError):
            project_graph(sample_nodes, sample_edges, "spaceship")

    def test_project_returns_fresh_lists(self, sample_nodes, sample_edges):
        view = project_graph(sample_nodes, sample_edges)
        assert view.nodes is not sample_nodes
        assert view.edges is not sample_edges


# ============================================================================
# Search Tests
# ============================================================================


class TestSearchNodes:
    def test_search_matches_names_in_node_order(self, sample_nodes):
        results = search_nodes(sample_nodes, "log")
        assert [n.id for n in results] == [
            "org_micrologic",
            "software_log4j",
            "vuln_cve2021_44228",
        ]

    def test_search_is_case_insensitive(self, sample_nodes):
        assert [n.id for n in search_nodes(sample_nodes, "NGINX")] == ["software_nginx"]

    def test_search_matches_vendor(self, sample_nodes):
        results = search_nodes(sample_nodes, "apache")
        assert [n.id for n in results] == ["software_log4j", "software_tomcat"]

    def test_search_matches_description(self, sample_nodes):
        results = search_nodes(sample_nodes, "jndi")
        assert [n.id for n in results] == ["vuln_cve2021_44228"]

    def test_search_short_query_returns_nothing(self, sample_nodes):
        assert search_nodes(sample_nodes, "a") == []
        assert search_nodes(sample_nodes, "  a  ") == []

    def test_search_limit(self, sample_nodes):
        assert len(search_nodes(sample_nodes, "cve", limit=2)) == 2


# ============================================================================
# Dependency Tree Tests
# ============================================================================


class TestDependencyTree:
    def test_tree_from_sample_root(self, sample_nodes, sample_edges):
        tree = build_dependency_tree(sample_nodes, sample_edges, "org_mtl")
        assert tree.node.id == "org_mtl"
        assert [c.node.id for c in tree.children] == ["org_micrologic", "org_techcorp"]
        # Every node except the isolated Jackson component, each exactly once
        assert tree.size() == 23

    def test_tree_unknown_root(self, sample_nodes, sample_edges):
        assert build_dependency_tree(sample_nodes, sample_edges, "ghost") is None

    def test_tree_cycle_terminates(self, cycle_graph):
        nodes, edges = cycle_graph
        tree = build_dependency_tree(nodes, edges, "A")
        assert tree.size() == 3
        assert tree.children[0].children[0].children == []

    def test_tree_prunes_dangling_targets(self):
        tree = build_dependency_tree([make_node("A")], [make_edge("A", "ghost")], "A")
        assert tree.children == []
