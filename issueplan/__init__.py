"""issueplan - dependency-graph scheduling for issue backlogs."""

__version__ = "0.1.0"

from issueplan.analyzer import IssueGraphAnalyzer, analyze
from issueplan.config import AnalyzerConfig, PriorityWeights
from issueplan.critical_path import CriticalPathAnalyzer
from issueplan.exceptions import (
    CycleError,
    DanglingEdgeError,
    DuplicateNodeError,
    IssueNotFoundError,
    IssuePlanException,
    SelfLoopError,
    StructuralError,
)
from issueplan.graph import GraphModel
from issueplan.loader import load_graph
from issueplan.models import (
    AnalysisResult,
    CriticalPath,
    DependencyEdge,
    GraphStatistics,
    IssueNode,
    IssueStatus,
    ParallelGroup,
    Priority,
)
from issueplan.planner import ParallelGroupPlanner
from issueplan.statistics import summarize
from issueplan.validation import GraphValidator
from issueplan.weights import PriorityWeigher

__all__ = [
    "__version__",
    "IssueGraphAnalyzer",
    "analyze",
    "AnalyzerConfig",
    "PriorityWeights",
    "CriticalPathAnalyzer",
    "CycleError",
    "DanglingEdgeError",
    "DuplicateNodeError",
    "IssueNotFoundError",
    "IssuePlanException",
    "SelfLoopError",
    "StructuralError",
    "GraphModel",
    "load_graph",
    "AnalysisResult",
    "CriticalPath",
    "DependencyEdge",
    "GraphStatistics",
    "IssueNode",
    "IssueStatus",
    "ParallelGroup",
    "Priority",
    "ParallelGroupPlanner",
    "summarize",
    "GraphValidator",
    "PriorityWeigher",
]
