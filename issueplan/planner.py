"""Parallel execution groups and priority-aware execution order."""

import heapq
from typing import Dict, List, Mapping, Optional

from issueplan.exceptions import CycleError
from issueplan.graph import GraphModel, id_sort_key
from issueplan.models import ParallelGroup
from issueplan.utils.logging import get_logger
from issueplan.weights import PriorityWeigher


class ParallelGroupPlanner:
    """Batches issues into ordered groups that can run concurrently."""

    def __init__(self, weigher: Optional[PriorityWeigher] = None):
        self.weigher = weigher or PriorityWeigher()

    def plan(self, graph: GraphModel) -> List[ParallelGroup]:
        """Group issues into execution layers (Kahn's algorithm, level by level).

        Group 0 holds every issue without dependencies; group k holds the
        issues whose dependencies all sit in groups 0..k-1. Inside a group,
        issues are listed by priority weight descending, then id ascending.

        The graph must already have passed ``GraphValidator.validate``.

        Args:
            graph: Validated graph

        Returns:
            Groups in execution order; empty list for an empty graph

        Raises:
            CycleError: If issues remain that can never become ready
        """
        logger = get_logger()
        remaining: Dict[str, int] = {
            node_id: graph.dependency_count(node_id) for node_id in graph.node_ids
        }
        frontier = [node_id for node_id, count in remaining.items() if count == 0]
        groups: List[ParallelGroup] = []
        assigned = 0

        while frontier:
            ordered = sorted(
                frontier, key=lambda node_id: self.weigher.presentation_key(graph.node(node_id))
            )
            groups.append(
                ParallelGroup(
                    group_index=len(groups),
                    issue_ids=tuple(ordered),
                    total_effort=sum(graph.node(node_id).effort for node_id in ordered),
                )
            )
            assigned += len(frontier)

            next_frontier = []
            for node_id in frontier:
                for dependent in graph.dependents(node_id):
                    remaining[dependent] -= 1
                    if remaining[dependent] == 0:
                        next_frontier.append(dependent)
            frontier = next_frontier

        if assigned != len(graph):
            raise CycleError([], message="Cannot create parallel groups (likely cycle)")

        logger.debug("Parallel groups planned", groups=len(groups), issues=assigned)
        return groups

    def execution_order(self, graph: GraphModel, scores: Mapping[str, float]) -> List[str]:
        """Topological order that always starts the best-scored ready issue next.

        Ties on score go to the smallest id.

        Raises:
            CycleError: If issues remain that can never become ready
        """
        remaining = {node_id: graph.dependency_count(node_id) for node_id in graph.node_ids}
        heap = [
            (-scores[node_id], id_sort_key(node_id))
            for node_id, count in remaining.items()
            if count == 0
        ]
        heapq.heapify(heap)
        order: List[str] = []

        while heap:
            _, (_, node_id) = heapq.heappop(heap)
            order.append(node_id)
            for dependent in graph.dependents(node_id):
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    heapq.heappush(heap, (-scores[dependent], id_sort_key(dependent)))

        if len(order) != len(graph):
            raise CycleError([], message="Failed to create execution order (likely cycle)")

        return order
