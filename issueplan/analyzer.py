"""Full analysis pipeline: validate, plan, and summarize an issue graph."""

from typing import Dict, Iterable, Optional

from issueplan.config import AnalyzerConfig, load_analyzer_config
from issueplan.critical_path import CriticalPathAnalyzer
from issueplan.graph import EdgeLike, GraphModel
from issueplan.models import AnalysisResult, AnalyzedIssue, IssueNode
from issueplan.planner import ParallelGroupPlanner
from issueplan.statistics import summarize
from issueplan.utils.logging import configure_logging, get_logger
from issueplan.validation import GraphValidator
from issueplan.weights import PriorityWeigher
from issueplan.work_queue import build_queue, dependencies_resolved


class IssueGraphAnalyzer:
    """Runs every analysis stage over one graph snapshot.

    Stages run in a fixed order: build, validate, then critical path and
    parallel groups, then scoring, queue and statistics. Structural and
    cycle errors propagate unchanged; no partial result is produced.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()
        self.weigher = PriorityWeigher(self.config)
        self.validator = GraphValidator()
        self.critical_path_analyzer = CriticalPathAnalyzer()
        self.planner = ParallelGroupPlanner(self.weigher)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "IssueGraphAnalyzer":
        """Create an analyzer from a YAML config file and apply its logging settings."""
        config = load_analyzer_config(yaml_path)
        configure_logging(structured=config.structured_logging, level=config.log_level.value)
        return cls(config)

    def analyze(self, nodes: Iterable[IssueNode], edges: Iterable[EdgeLike]) -> AnalysisResult:
        """Build a graph from records and analyze it.

        Raises:
            StructuralError: If the records do not form a valid graph
            CycleError: If the dependencies contain a cycle
        """
        return self.analyze_graph(GraphModel.build(nodes, edges))

    def analyze_graph(self, graph: GraphModel) -> AnalysisResult:
        """Analyze an already built graph.

        Raises:
            CycleError: If the dependencies contain a cycle
        """
        logger = get_logger()
        self.validator.validate(graph)

        critical_path = self.critical_path_analyzer.analyze(graph)
        groups = self.planner.plan(graph)

        on_path = set(critical_path.path)
        scores: Dict[str, float] = {
            node.id: self.weigher.score(node, graph.dependent_count(node.id), node.id in on_path)
            for node in graph.nodes
        }

        execution_order = self.planner.execution_order(graph, scores)
        queue = build_queue(graph, scores, self.weigher)
        statistics = summarize(graph, critical_path, groups, self.weigher)

        depth = {issue_id: group.group_index for group in groups for issue_id in group.issue_ids}
        issues = {
            node.id: AnalyzedIssue(
                node=node,
                dependencies=tuple(graph.dependencies(node.id)),
                dependents=tuple(graph.dependents(node.id)),
                transitive_dependencies=tuple(graph.transitive_dependencies(node.id)),
                depth=depth[node.id],
                priority_score=scores[node.id],
                on_critical_path=node.id in on_path,
                dependencies_resolved=dependencies_resolved(graph, node.id),
            )
            for node in graph.nodes
        }

        logger.info(
            "Dependency graph analyzed",
            issues=statistics.total_nodes,
            dependencies=statistics.total_edges,
            groups=len(groups),
            critical_path_length=statistics.critical_path_length,
            total_duration=critical_path.total_duration,
            ready=len(queue.ready_for_execution),
        )

        return AnalysisResult(
            issues=issues,
            execution_order=tuple(execution_order),
            parallel_groups=tuple(groups),
            critical_path=critical_path,
            prioritized_queue=queue,
            statistics=statistics,
        )


def analyze(
    nodes: Iterable[IssueNode],
    edges: Iterable[EdgeLike],
    config: Optional[AnalyzerConfig] = None,
) -> AnalysisResult:
    """Convenience wrapper around ``IssueGraphAnalyzer(config).analyze``."""
    return IssueGraphAnalyzer(config).analyze(nodes, edges)
