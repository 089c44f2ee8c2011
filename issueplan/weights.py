"""Priority weights and priority scoring."""

from typing import Dict, Iterable, List, Mapping, Optional, Union

from issueplan.config import AnalyzerConfig, PriorityWeights
from issueplan.graph import id_sort_key
from issueplan.models import IssueNode, Priority


class PriorityWeigher:
    """Pure lookups against a fixed weight configuration.

    Weights rank work; they never feed the critical path or the group
    partition, which use effort and edges only.
    """

    def __init__(self, config: Union[AnalyzerConfig, PriorityWeights, None] = None):
        if isinstance(config, PriorityWeights):
            config = AnalyzerConfig(weights=config)
        self.config = config or AnalyzerConfig()
        self._weights: Dict[Priority, float] = self.config.weights.as_dict()

    @classmethod
    def from_weights(cls, weights: PriorityWeights) -> "PriorityWeigher":
        return cls(AnalyzerConfig(weights=weights))

    def weight(self, priority: Priority) -> float:
        return self._weights[Priority(priority)]

    def score(self, node: IssueNode, dependent_count: int, on_critical_path: bool) -> float:
        """Priority score used for ranking ready work.

        weight(priority)
        + dependent_count * dependent_multiplier
        + critical_path_bonus when on the critical path
        + quick_win_bonus when effort <= quick_win_threshold
        """
        config = self.config
        score = self.weight(node.priority)
        score += dependent_count * config.dependent_multiplier
        if on_critical_path:
            score += config.critical_path_bonus
        if node.effort <= config.quick_win_threshold:
            score += config.quick_win_bonus
        return score

    def presentation_key(self, node: IssueNode):
        """Sort key placing heavier priorities first, then ids ascending."""
        return (-self.weight(node.priority), id_sort_key(node.id))

    def rank(self, issue_ids: Iterable[str], scores: Mapping[str, float]) -> List[str]:
        """Ids ordered by score descending, ties broken by id."""
        return sorted(issue_ids, key=lambda issue_id: (-scores[issue_id], id_sort_key(issue_id)))
