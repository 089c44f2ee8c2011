"""Effort-weighted critical path through a validated dependency graph."""

from typing import Dict, Optional

from issueplan.graph import GraphModel, id_sort_key
from issueplan.models import CriticalPath
from issueplan.utils.logging import get_logger


class CriticalPathAnalyzer:
    """Finds the dependency chain with the greatest cumulative effort."""

    def analyze(self, graph: GraphModel) -> CriticalPath:
        """Compute the critical path.

        For every issue, ``value(n) = effort(n) + max(value(d))`` over its
        dependencies ``d``, evaluated dependencies-first. The path ends at the
        terminal issue (nothing depends on it) with the highest value and is
        rebuilt by stepping back through the dependency that gave the max.
        All ties go to the smallest id.

        The graph must already have passed ``GraphValidator.validate``.

        Args:
            graph: Validated graph

        Returns:
            CriticalPath listed dependency first; empty for an empty graph
        """
        logger = get_logger()
        if len(graph) == 0:
            logger.debug("Critical path skipped for empty graph")
            return CriticalPath()

        value: Dict[str, float] = {}
        via: Dict[str, Optional[str]] = {}

        for node_id in graph.topological_order():
            dependencies = graph.dependencies(node_id)
            best = (
                min(dependencies, key=lambda dep: (-value[dep], id_sort_key(dep)))
                if dependencies
                else None
            )
            via[node_id] = best
            inherited = value[best] if best is not None else 0.0
            value[node_id] = graph.node(node_id).effort + inherited

        end = min(graph.leaves(), key=lambda node_id: (-value[node_id], id_sort_key(node_id)))

        path = []
        current: Optional[str] = end
        while current is not None:
            path.append(current)
            current = via[current]
        path.reverse()

        efforts = {node_id: graph.node(node_id).effort for node_id in path}
        total_duration = sum(efforts[node_id] for node_id in path)
        bottleneck = min(path, key=lambda node_id: (-efforts[node_id], id_sort_key(node_id)))

        logger.debug(
            "Critical path computed",
            length=len(path),
            total_duration=total_duration,
            bottleneck=bottleneck,
        )
        return CriticalPath(path=tuple(path), total_duration=total_duration, bottleneck=bottleneck)
