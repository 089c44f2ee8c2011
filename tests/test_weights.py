"""Tests for priority weights and scoring."""

import pytest
from pydantic import ValidationError

from issueplan.config import AnalyzerConfig, PriorityWeights
from issueplan.models import Priority
from issueplan.weights import PriorityWeigher


class TestWeight:
    def test_default_weights(self):
        weigher = PriorityWeigher()

        assert weigher.weight(Priority.P0) == 100
        assert weigher.weight(Priority.P1) == 75
        assert weigher.weight(Priority.P2) == 50
        assert weigher.weight(Priority.P3) == 25

    def test_accepts_string_priority(self):
        assert PriorityWeigher().weight("P1") == 75

    def test_custom_weights_without_ordering(self):
        weigher = PriorityWeigher.from_weights(PriorityWeights(P0=1, P1=5, P2=0, P3=2))

        assert weigher.weight(Priority.P1) == 5
        assert weigher.weight(Priority.P2) == 0

    def test_weights_passed_directly(self):
        weigher = PriorityWeigher(PriorityWeights(P0=1, P1=1, P2=1, P3=1))

        assert weigher.weight(Priority.P0) == 1
        assert weigher.config.critical_path_bonus == 50

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            PriorityWeights(P0=-1)

    def test_weights_are_frozen(self):
        weights = PriorityWeights()
        with pytest.raises(ValidationError):
            weights.P0 = 5


class TestScore:
    def test_base_score_is_weight(self, make_issue):
        weigher = PriorityWeigher()
        node = make_issue("a", effort=10, priority=Priority.P1)

        assert weigher.score(node, dependent_count=0, on_critical_path=False) == 75

    def test_all_bonuses(self, make_issue):
        weigher = PriorityWeigher()
        node = make_issue("a", effort=4, priority=Priority.P0)

        # 100 + 2 * 10 + 50 + 15
        assert weigher.score(node, dependent_count=2, on_critical_path=True) == 185

    def test_quick_win_threshold_is_inclusive(self, make_issue):
        weigher = PriorityWeigher(AnalyzerConfig(quick_win_threshold=2, quick_win_bonus=7))

        at_threshold = make_issue("a", effort=2, priority=Priority.P3)
        above = make_issue("b", effort=2.5, priority=Priority.P3)

        assert weigher.score(at_threshold, 0, False) == 32
        assert weigher.score(above, 0, False) == 25


class TestRank:
    def test_rank_by_score_then_id(self):
        scores = {"ISS-10": 5, "ISS-2": 5, "ISS-1": 9}

        assert PriorityWeigher().rank(scores, scores) == ["ISS-1", "ISS-2", "ISS-10"]

    def test_presentation_key(self, make_issue):
        weigher = PriorityWeigher()
        nodes = [make_issue("b", priority=Priority.P3), make_issue("a", priority=Priority.P0)]

        assert [n.id for n in sorted(nodes, key=weigher.presentation_key)] == ["a", "b"]
