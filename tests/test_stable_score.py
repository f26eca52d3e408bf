"""
StableScoreAggregator tests

Checks:
- empty and single-attempt histories
- adaptive k shrinking with sample count
- trend detection window
- display / confidence band helpers
"""

from __future__ import annotations

import pytest

from models import AttemptScore, SkillRecording
from services.stable_score import (
    StableScoreAggregator,
    get_confidence_band,
    get_display_score,
    get_trend_description,
)


def _attempts(*scores):
    return [
        AttemptScore(attempt_number=i + 1, score=s, timestamp=f"2024-01-0{i % 9 + 1}T10:00:00Z")
        for i, s in enumerate(scores)
    ]


@pytest.fixture
def aggregator():
    return StableScoreAggregator(base_k=1.0, trend_window=3, trend_delta=5)


class TestDegenerateHistories:
    def test_empty(self, aggregator):
        result = aggregator.calculate_stable_score([])
        assert result.stable == 0
        assert result.mean == 0
        assert result.stddev == 0.0
        assert result.confidence == 0.0
        assert result.raw_scores == []
        assert result.trend == "insufficient_data"

    def test_single_attempt(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(80))
        assert result.stable == 80
        assert result.mean == 80
        assert result.confidence == pytest.approx(0.2)
        assert result.trend == "insufficient_data"

    def test_single_attempt_less_confident_than_five(self, aggregator):
        one = aggregator.calculate_stable_score(_attempts(80))
        five = aggregator.calculate_stable_score(_attempts(80, 80, 80, 80, 80))
        assert one.confidence < five.confidence
        assert five.confidence == pytest.approx(1.0)

    def test_stable_never_negative(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(0, 100))
        assert result.stable == 0


class TestAggregation:
    def test_two_attempts(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(60, 80))
        assert result.mean == 70
        assert result.stddev == pytest.approx(10.0)
        # 70 - 1.2 * 10
        assert result.stable == 58
        assert result.confidence == pytest.approx(0.36)

    def test_three_attempts(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(50, 70, 90))
        assert result.stable == 54
        assert result.stddev == pytest.approx(16.3)
        assert result.confidence == pytest.approx(0.5)

    def test_five_attempts(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(50, 60, 70, 80, 90))
        assert result.stable == 60
        assert result.stddev == pytest.approx(14.1)
        assert result.confidence == pytest.approx(0.86)

    def test_stable_never_exceeds_mean(self, aggregator):
        for scores in [(10, 90), (40, 45, 50), (70, 20, 90, 60, 55, 81)]:
            result = aggregator.calculate_stable_score(_attempts(*scores))
            assert result.stable <= sum(scores) / len(scores)

    def test_reported_fields_round_half_up(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(78, 42, 93, 59, 47, 62))
        assert result.stddev == 17.5
        # 1 - 17.5 / 100 sits exactly on a hundredth tie
        assert result.confidence == 0.83

    def test_stddev_tie_rounds_up(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(0, 0.5))
        assert result.stddev == 0.3

    def test_explicit_k_overrides_base(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(60, 80), k=0.0)
        assert result.stable == 70

    def test_adaptive_k(self, aggregator):
        assert [aggregator.adaptive_k(n) for n in range(1, 7)] == pytest.approx(
            [1.5, 1.2, 1.0, 1.0, 0.7, 0.7]
        )

    def test_constant_history_matches_mean(self, aggregator):
        for n in range(1, 8):
            result = aggregator.calculate_stable_score(_attempts(*([72] * n)))
            assert result.stable == result.mean == 72

    def test_trust_grows_with_history(self, aggregator):
        gaps = []
        for pairs in (1, 2, 3):
            result = aggregator.calculate_stable_score(_attempts(*([60, 80] * pairs)))
            gaps.append(result.mean - result.stable)
        assert gaps == sorted(gaps, reverse=True)
        assert gaps[0] > gaps[-1]

    def test_deterministic(self, aggregator):
        attempts = _attempts(55, 62, 71, 68, 74)
        first = aggregator.calculate_stable_score(attempts)
        assert all(aggregator.calculate_stable_score(attempts) == first for _ in range(100))


class TestTrend:
    @pytest.mark.parametrize("scores", [(70,), (70, 75), (60, 70, 80)])
    def test_insufficient_without_earlier_scores(self, aggregator, scores):
        assert aggregator.calculate_stable_score(_attempts(*scores)).trend == "insufficient_data"

    def test_improving(self, aggregator):
        assert aggregator.calculate_stable_score(_attempts(50, 60, 70, 80, 90)).trend == "improving"

    def test_improving_with_four_attempts(self, aggregator):
        assert aggregator.calculate_stable_score(_attempts(60, 60, 60, 80)).trend == "improving"

    def test_declining(self, aggregator):
        assert aggregator.calculate_stable_score(_attempts(90, 90, 60, 60, 60)).trend == "declining"

    def test_stable(self, aggregator):
        assert aggregator.calculate_stable_score(_attempts(70, 72, 71, 70, 73)).trend == "stable"

    def test_delta_is_exclusive(self, aggregator):
        # recent mean exactly 5 above earlier mean
        assert aggregator.calculate_stable_score(_attempts(60, 65, 65, 65)).trend == "stable"

    def test_custom_window(self):
        aggregator = StableScoreAggregator(base_k=1.0, trend_window=2, trend_delta=5)
        assert aggregator.calculate_stable_score(_attempts(50, 70, 80)).trend == "improving"


class TestDisplayHelpers:
    def test_display_uses_mean_for_consistent_history(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(70, 72, 71, 70, 73))
        assert result.stable == 70
        assert get_display_score(result) == result.mean == 71

    def test_display_uses_stable_for_short_history(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(70, 72, 71))
        assert get_display_score(result) == result.stable

    def test_display_uses_stable_for_noisy_history(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(50, 60, 70, 80, 90))
        assert get_display_score(result) == result.stable == 60

    def test_confidence_band(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(60, 80))
        assert get_confidence_band(result) == (60, 80)

    def test_confidence_band_clamped(self, aggregator):
        result = aggregator.calculate_stable_score(_attempts(0, 100))
        assert get_confidence_band(result) == (0, 100)

    @pytest.mark.parametrize("trend", ["improving", "stable", "declining", "insufficient_data"])
    def test_trend_description(self, trend):
        assert get_trend_description(trend)


class TestModuleScores:
    def test_groups_by_module_and_skips_unscored(self, aggregator):
        recordings = [
            SkillRecording(module_type="fluency", attempt_number=1, ai_score=60, created_at="t1"),
            SkillRecording(module_type="pronunciation", attempt_number=1, ai_score=75, created_at="t2"),
            SkillRecording(module_type="fluency", attempt_number=2, ai_score=80, created_at="t3"),
            SkillRecording(module_type="syntax", attempt_number=1, ai_score=None, created_at="t4"),
        ]
        modules = aggregator.calculate_module_scores(recordings)
        assert set(modules) == {"fluency", "pronunciation"}
        assert modules["fluency"].raw_scores == [60, 80]
        assert modules["fluency"].stable == 58
        assert modules["pronunciation"].stable == 75

    def test_empty(self, aggregator):
        assert aggregator.calculate_module_scores([]) == {}
