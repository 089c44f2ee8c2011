"""Ready/blocked work queue derived from issue statuses and scores."""

from typing import Mapping, Optional

from issueplan.graph import GraphModel
from issueplan.models import ACTIONABLE_STATUSES, RESOLVED_STATUSES, PrioritizedQueue
from issueplan.weights import PriorityWeigher


def dependencies_resolved(graph: GraphModel, issue_id: str) -> bool:
    """True when every direct dependency is done or cancelled."""
    return all(
        graph.node(dependency).status in RESOLVED_STATUSES
        for dependency in graph.dependencies(issue_id)
    )


def build_queue(
    graph: GraphModel,
    scores: Mapping[str, float],
    weigher: Optional[PriorityWeigher] = None,
) -> PrioritizedQueue:
    """Rank all issues and split the actionable ones into ready and blocked.

    Only ``open`` and ``blocked`` issues are actionable; ``in_progress``,
    ``done`` and ``cancelled`` issues appear in ``queue`` only.
    """
    weigher = weigher or PriorityWeigher()
    actionable = [node.id for node in graph.nodes if node.status in ACTIONABLE_STATUSES]

    ready = [issue_id for issue_id in actionable if dependencies_resolved(graph, issue_id)]
    blocked = [issue_id for issue_id in actionable if not dependencies_resolved(graph, issue_id)]

    return PrioritizedQueue(
        queue=tuple(weigher.rank(graph.node_ids, scores)),
        ready_for_execution=tuple(weigher.rank(ready, scores)),
        blocked=tuple(blocked),
    )


def next_executable_issue(queue: PrioritizedQueue) -> Optional[str]:
    """Highest-ranked ready issue, or None when nothing can start."""
    if queue.ready_for_execution:
        return queue.ready_for_execution[0]
    return None
