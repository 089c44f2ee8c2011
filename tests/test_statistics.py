"""Tests for graph statistics."""

from issueplan.critical_path import CriticalPathAnalyzer
from issueplan.graph import GraphModel
from issueplan.models import IssueStatus, Priority
from issueplan.planner import ParallelGroupPlanner
from issueplan.statistics import summarize


def _summarize(graph):
    return summarize(
        graph,
        CriticalPathAnalyzer().analyze(graph),
        ParallelGroupPlanner().plan(graph),
    )


class TestSummarize:
    """Test summarize over analyzer outputs."""

    def test_linear_chain(self, chain_graph):
        stats = _summarize(chain_graph)

        assert stats.total_nodes == 3
        assert stats.total_edges == 2
        assert stats.max_depth == 2
        assert stats.root_issues == 1
        assert stats.leaf_issues == 1
        assert stats.critical_path_length == 3
        assert stats.total_effort == 6

    def test_histograms_are_complete(self, chain_graph):
        stats = _summarize(chain_graph)

        assert stats.by_priority == {
            Priority.P0: 1,
            Priority.P1: 1,
            Priority.P2: 1,
            Priority.P3: 0,
        }
        assert set(stats.by_status) == set(IssueStatus)
        assert stats.by_status[IssueStatus.OPEN] == 3
        assert stats.by_status[IssueStatus.CANCELLED] == 0

    def test_histograms_sum_to_total(self, make_issue):
        nodes = [
            make_issue("a", priority=Priority.P0, status=IssueStatus.DONE),
            make_issue("b", priority=Priority.P3, status=IssueStatus.BLOCKED),
            make_issue("c", priority=Priority.P3, status="in-progress"),
            make_issue("d", priority=Priority.P1, status=IssueStatus.CANCELLED),
        ]
        graph = GraphModel.build(nodes, [("b", "a"), ("c", "a")])

        stats = _summarize(graph)

        assert sum(stats.by_priority.values()) == stats.total_nodes
        assert sum(stats.by_status.values()) == stats.total_nodes
        assert stats.by_status[IssueStatus.IN_PROGRESS] == 1

    def test_empty_graph(self, empty_graph):
        stats = _summarize(empty_graph)

        assert stats.total_nodes == 0
        assert stats.total_edges == 0
        assert stats.max_depth == 0
        assert stats.root_issues == 0
        assert stats.leaf_issues == 0
        assert stats.critical_path_length == 0
        assert stats.max_fan_in == 0
        assert stats.max_fan_out == 0
        assert stats.by_priority == {priority: 0 for priority in Priority}
        assert stats.by_status == {status: 0 for status in IssueStatus}

    def test_isolated_nodes(self, make_issue):
        graph = GraphModel.build([make_issue("a"), make_issue("b")], [])

        stats = _summarize(graph)

        assert stats.max_depth == 0
        assert stats.total_edges == 0
        assert stats.root_issues == 2
        assert stats.leaf_issues == 2

    def test_fan_in_and_out(self, diamond_graph):
        stats = _summarize(diamond_graph)

        assert stats.max_fan_in == 2
        assert stats.max_fan_out == 2
        assert stats.max_depth == 2

    def test_priority_weight_total(self, chain_graph):
        stats = _summarize(chain_graph)

        assert stats.priority_weight_total == 100 + 75 + 50
