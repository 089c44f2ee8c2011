"""Tests for parallel group planning and execution order."""

import pytest

from issueplan.config import PriorityWeights
from issueplan.exceptions import CycleError
from issueplan.graph import GraphModel
from issueplan.models import Priority
from issueplan.planner import ParallelGroupPlanner
from issueplan.weights import PriorityWeigher


def _assert_valid_partition(graph, groups):
    index = {}
    for group in groups:
        for issue_id in group.issue_ids:
            assert issue_id not in index, f"{issue_id} assigned twice"
            index[issue_id] = group.group_index

    assert set(index) == set(graph.node_ids)
    for edge in graph.edges:
        assert index[edge.to_id] < index[edge.from_id]


class TestPlan:
    """Test Kahn level batching."""

    def test_linear_chain(self, chain_graph):
        groups = ParallelGroupPlanner().plan(chain_graph)

        assert [group.issue_ids for group in groups] == [("C",), ("B",), ("A",)]
        assert [group.group_index for group in groups] == [0, 1, 2]

    def test_diamond_co_batches_branches(self, diamond_graph):
        groups = ParallelGroupPlanner().plan(diamond_graph)

        assert len(groups) == 3
        assert groups[0].issue_ids == ("D",)
        assert set(groups[1].issue_ids) == {"B", "C"}
        assert groups[2].issue_ids == ("A",)

    def test_group_total_effort(self, diamond_graph):
        groups = ParallelGroupPlanner().plan(diamond_graph)

        assert [group.total_effort for group in groups] == [1, 6, 1]

    def test_empty_graph(self, empty_graph):
        assert ParallelGroupPlanner().plan(empty_graph) == []

    def test_isolated_nodes_share_one_group(self, make_issue):
        graph = GraphModel.build([make_issue("a"), make_issue("b"), make_issue("c")], [])

        groups = ParallelGroupPlanner().plan(graph)

        assert len(groups) == 1
        assert groups[0].issue_ids == ("a", "b", "c")

    def test_node_waits_for_deepest_dependency(self, make_issue):
        nodes = [make_issue(name) for name in ["a", "b", "c", "d"]]
        edges = [("d", "a"), ("d", "c"), ("c", "b"), ("b", "a")]
        graph = GraphModel.build(nodes, edges)

        groups = ParallelGroupPlanner().plan(graph)

        assert [group.issue_ids for group in groups] == [("a",), ("b",), ("c",), ("d",)]

    def test_partition_invariant(self, make_issue):
        nodes = [make_issue(f"n{i}") for i in range(8)]
        edges = [
            ("n7", "n6"), ("n7", "n1"), ("n6", "n5"), ("n5", "n0"),
            ("n4", "n0"), ("n3", "n4"), ("n2", "n1"), ("n6", "n3"),
        ]
        graph = GraphModel.build(nodes, edges)

        _assert_valid_partition(graph, ParallelGroupPlanner().plan(graph))

    def test_within_group_order_priority_then_id(self, make_issue):
        nodes = [
            make_issue("b", priority=Priority.P2),
            make_issue("a", priority=Priority.P2),
            make_issue("z", priority=Priority.P0),
            make_issue("m", priority=Priority.P3),
        ]
        graph = GraphModel.build(nodes, [])

        groups = ParallelGroupPlanner().plan(graph)

        assert groups[0].issue_ids == ("z", "a", "b", "m")

    def test_custom_weights_change_presentation_only(self, make_issue):
        nodes = [make_issue("x", priority=Priority.P0), make_issue("y", priority=Priority.P3)]
        graph = GraphModel.build(nodes, [])
        inverted = PriorityWeigher.from_weights(PriorityWeights(P0=0, P1=1, P2=2, P3=3))

        default_groups = ParallelGroupPlanner().plan(graph)
        inverted_groups = ParallelGroupPlanner(inverted).plan(graph)

        assert default_groups[0].issue_ids == ("x", "y")
        assert inverted_groups[0].issue_ids == ("y", "x")
        assert set(default_groups[0].issue_ids) == set(inverted_groups[0].issue_ids)

    def test_cyclic_input_raises(self, make_issue):
        graph = GraphModel.build([make_issue("A"), make_issue("B")], [("A", "B"), ("B", "A")])

        with pytest.raises(CycleError):
            ParallelGroupPlanner().plan(graph)


class TestExecutionOrder:
    """Test score-driven topological ordering."""

    def test_respects_dependencies(self, diamond_graph):
        scores = {"A": 1000, "B": 1, "C": 5, "D": 0}

        order = ParallelGroupPlanner().execution_order(diamond_graph, scores)

        assert order == ["D", "C", "B", "A"]

    def test_higher_score_first_among_ready(self, make_issue):
        graph = GraphModel.build([make_issue("a"), make_issue("b"), make_issue("c")], [])

        order = ParallelGroupPlanner().execution_order(graph, {"a": 1, "b": 3, "c": 2})

        assert order == ["b", "c", "a"]

    def test_score_ties_break_by_id(self, make_issue):
        graph = GraphModel.build([make_issue("ISS-10"), make_issue("ISS-2")], [])

        order = ParallelGroupPlanner().execution_order(graph, {"ISS-10": 1, "ISS-2": 1})

        assert order == ["ISS-2", "ISS-10"]

    def test_cyclic_input_raises(self, make_issue):
        graph = GraphModel.build([make_issue("A"), make_issue("B")], [("A", "B"), ("B", "A")])

        with pytest.raises(CycleError):
            ParallelGroupPlanner().execution_order(graph, {"A": 0, "B": 0})
