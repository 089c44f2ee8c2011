"""Issue, edge and derived result models."""

from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class Priority(str, Enum):
    """Issue priority classes, most urgent first."""

    P0 = "P0"
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"


class IssueStatus(str, Enum):
    """Lifecycle states of an issue."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    DONE = "done"
    CANCELLED = "cancelled"


# Statuses whose work no longer holds back dependents
RESOLVED_STATUSES = frozenset({IssueStatus.DONE, IssueStatus.CANCELLED})

# Statuses still waiting to be picked up
ACTIONABLE_STATUSES = frozenset({IssueStatus.OPEN, IssueStatus.BLOCKED})


class IssueNode(BaseModel):
    """
    A single work item in the dependency graph.

    Nodes are immutable once constructed. Upstream documents may use
    ``componentId`` and ``in-progress``; both are accepted.

    Example:
    ```yaml
    nodes:
      - id: ISS-001
        title: "Set up database schema"
        priority: P0
        effort: 4
        status: open
        componentId: CMP-001
    ```
    """

    model_config = {"frozen": True, "populate_by_name": True}

    id: str = Field(min_length=1, description="Unique issue identifier")
    title: str = Field(min_length=1, description="Human readable title")
    priority: Priority = Field(default=Priority.P2, description="Priority class")
    effort: float = Field(default=0.0, ge=0, description="Estimated effort (e.g. hours)")
    status: IssueStatus = Field(default=IssueStatus.OPEN, description="Lifecycle state")
    component_id: Optional[str] = Field(
        default=None, alias="componentId", description="Originating component"
    )
    url: Optional[str] = Field(default=None, description="Link to the tracked issue")

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v


class DependencyEdge(BaseModel):
    """``from_id`` depends on ``to_id``: ``to_id`` must finish first."""

    model_config = {"frozen": True, "populate_by_name": True}

    from_id: str = Field(alias="from", min_length=1, description="Dependent issue")
    to_id: str = Field(alias="to", min_length=1, description="Issue depended upon")

    @property
    def key(self) -> Tuple[str, str]:
        return (self.from_id, self.to_id)


class CriticalPath(BaseModel):
    """Longest effort-weighted chain, listed dependency first."""

    model_config = {"frozen": True}

    path: Tuple[str, ...] = ()
    total_duration: float = 0.0
    bottleneck: Optional[str] = None


class ParallelGroup(BaseModel):
    """Issues that can run concurrently once all earlier groups are finished."""

    model_config = {"frozen": True}

    group_index: int = Field(ge=0)
    issue_ids: Tuple[str, ...]
    total_effort: float = 0.0


class GraphStatistics(BaseModel):
    """Aggregate counts over an analyzed graph."""

    model_config = {"frozen": True}

    total_nodes: int = 0
    total_edges: int = 0
    max_depth: int = 0
    root_issues: int = 0
    leaf_issues: int = 0
    critical_path_length: int = 0
    by_priority: Dict[Priority, int] = Field(default_factory=dict)
    by_status: Dict[IssueStatus, int] = Field(default_factory=dict)
    total_effort: float = 0.0
    max_fan_in: int = 0
    max_fan_out: int = 0
    priority_weight_total: float = 0.0


class PrioritizedQueue(BaseModel):
    """Score-ranked view of the work that remains."""

    model_config = {"frozen": True}

    queue: Tuple[str, ...] = ()
    ready_for_execution: Tuple[str, ...] = ()
    blocked: Tuple[str, ...] = ()


class AnalyzedIssue(BaseModel):
    """Per-issue view combining the node with everything derived about it."""

    model_config = {"frozen": True}

    node: IssueNode
    dependencies: Tuple[str, ...] = ()
    dependents: Tuple[str, ...] = ()
    transitive_dependencies: Tuple[str, ...] = ()
    depth: int = 0
    priority_score: float = 0.0
    on_critical_path: bool = False
    dependencies_resolved: bool = True


class AnalysisResult(BaseModel):
    """Everything a single analysis run produces."""

    model_config = {"frozen": True}

    issues: Dict[str, AnalyzedIssue] = Field(default_factory=dict)
    execution_order: Tuple[str, ...] = ()
    parallel_groups: Tuple[ParallelGroup, ...] = ()
    critical_path: CriticalPath = Field(default_factory=CriticalPath)
    prioritized_queue: PrioritizedQueue = Field(default_factory=PrioritizedQueue)
    statistics: GraphStatistics = Field(default_factory=GraphStatistics)
