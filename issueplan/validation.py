"""Cycle detection over a dependency graph."""

from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping

from issueplan.exceptions import CycleError
from issueplan.graph import GraphModel, id_sort_key
from issueplan.utils.logging import get_logger


class _Color(Enum):
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


class GraphValidator:
    """Checks that a GraphModel is acyclic.

    Validation must run before critical path or group planning; those stages
    assume a DAG and do not repeat the check.
    """

    def validate(self, graph: GraphModel) -> GraphModel:
        """Validate the graph.

        Args:
            graph: Graph to check

        Returns:
            The same graph, unchanged

        Raises:
            CycleError: With the first cycle found, as a closed walk
                (first id == last id)
        """
        logger = get_logger()
        cycles = self._search(graph, stop_at_first=True)
        if cycles:
            cycle = cycles[0]
            logger.error("Circular dependency detected", cycle=" -> ".join(cycle))
            raise CycleError(cycle)

        logger.debug("Dependency graph validated", nodes=len(graph), edges=graph.edge_count)
        return graph

    def find_cycles(self, graph: GraphModel) -> List[List[str]]:
        """Report every back-edge cycle found by one full DFS, without raising."""
        return self._search(graph, stop_at_first=False)

    def blocked_by_cycles(self, graph: GraphModel, cycles: Iterable[List[str]]) -> List[str]:
        """Cycle members plus every issue that transitively depends on one.

        Purely diagnostic: the caller decides what to do with these issues.
        """
        blocked = set()
        for cycle in cycles:
            for issue_id in cycle:
                if issue_id in blocked:
                    continue
                blocked.add(issue_id)
                blocked.update(graph.transitive_dependents(issue_id))
        return sorted(blocked, key=id_sort_key)

    def executable_issues(
        self, graph: GraphModel, cycles: Iterable[List[str]], scores: Mapping[str, float]
    ) -> List[str]:
        """Issues untouched by any cycle, highest score first, ties by id."""
        blocked = set(self.blocked_by_cycles(graph, cycles))
        free = [issue_id for issue_id in graph.node_ids if issue_id not in blocked]
        return sorted(free, key=lambda issue_id: (-scores[issue_id], id_sort_key(issue_id)))

    def _search(self, graph: GraphModel, stop_at_first: bool) -> List[List[str]]:
        """Three-color iterative DFS following dependencies in supplied order."""
        color: Dict[str, _Color] = {node_id: _Color.UNVISITED for node_id in graph.node_ids}
        cycles: List[List[str]] = []

        for start in graph.node_ids:
            if color[start] is not _Color.UNVISITED:
                continue

            color[start] = _Color.IN_PROGRESS
            path: List[str] = [start]
            stack: List[Iterator[str]] = [iter(graph.dependencies(start))]

            while stack:
                descended = False
                for dependency in stack[-1]:
                    state = color[dependency]
                    if state is _Color.IN_PROGRESS:
                        cycle_start = path.index(dependency)
                        cycles.append(path[cycle_start:] + [dependency])
                        if stop_at_first:
                            return cycles
                    elif state is _Color.UNVISITED:
                        color[dependency] = _Color.IN_PROGRESS
                        path.append(dependency)
                        stack.append(iter(graph.dependencies(dependency)))
                        descended = True
                        break

                if not descended:
                    stack.pop()
                    color[path.pop()] = _Color.DONE

        return cycles
