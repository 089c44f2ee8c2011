"""Aggregate statistics over an analyzed graph."""

from typing import Dict, Optional, Sequence

from issueplan.graph import GraphModel
from issueplan.models import CriticalPath, GraphStatistics, IssueStatus, ParallelGroup, Priority
from issueplan.weights import PriorityWeigher


def summarize(
    graph: GraphModel,
    critical_path: CriticalPath,
    groups: Sequence[ParallelGroup],
    weigher: Optional[PriorityWeigher] = None,
) -> GraphStatistics:
    """Summarize a graph together with its critical path and groups.

    Both histograms list every enum member, including zero counts, and each
    sums to ``total_nodes``.
    """
    weigher = weigher or PriorityWeigher()

    by_priority: Dict[Priority, int] = {priority: 0 for priority in Priority}
    by_status: Dict[IssueStatus, int] = {status: 0 for status in IssueStatus}
    total_effort = 0.0
    priority_weight_total = 0.0

    for node in graph.nodes:
        by_priority[node.priority] += 1
        by_status[node.status] += 1
        total_effort += node.effort
        priority_weight_total += weigher.weight(node.priority)

    node_ids = graph.node_ids
    return GraphStatistics(
        total_nodes=len(graph),
        total_edges=graph.edge_count,
        max_depth=max(len(groups) - 1, 0),
        root_issues=len(graph.roots()),
        leaf_issues=len(graph.leaves()),
        critical_path_length=len(critical_path.path),
        by_priority=by_priority,
        by_status=by_status,
        total_effort=total_effort,
        max_fan_in=max((graph.dependent_count(node_id) for node_id in node_ids), default=0),
        max_fan_out=max((graph.dependency_count(node_id) for node_id in node_ids), default=0),
        priority_weight_total=priority_weight_total,
    )
