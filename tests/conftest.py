import pytest

from issueplan.graph import GraphModel
from issueplan.models import DependencyEdge, IssueNode, IssueStatus, Priority


@pytest.fixture
def make_issue():
    """Factory for IssueNode records with sensible defaults."""

    def _make(issue_id, effort=1, priority=Priority.P2, status=IssueStatus.OPEN, **kwargs):
        return IssueNode(
            id=issue_id,
            title=kwargs.pop("title", f"Issue {issue_id}"),
            effort=effort,
            priority=priority,
            status=status,
            **kwargs,
        )

    return _make


@pytest.fixture
def chain_graph(make_issue):
    """A depends on B, B depends on C."""
    nodes = [
        make_issue("A", effort=2, priority=Priority.P0),
        make_issue("B", effort=3, priority=Priority.P1),
        make_issue("C", effort=1, priority=Priority.P2),
    ]
    edges = [DependencyEdge(from_id="A", to_id="B"), DependencyEdge(from_id="B", to_id="C")]
    return GraphModel.build(nodes, edges)


@pytest.fixture
def diamond_graph(make_issue):
    """A depends on B and C, both of which depend on D."""
    nodes = [
        make_issue("A", effort=1),
        make_issue("B", effort=5),
        make_issue("C", effort=1),
        make_issue("D", effort=1),
    ]
    edges = [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")]
    return GraphModel.build(nodes, edges)


@pytest.fixture
def empty_graph():
    return GraphModel.build([], [])
