import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from config import Config
from models import AttemptScore, SkillRecording, StableScore, Trend
from services.rounding import round_half_up

TREND_DESCRIPTIONS: Dict[str, str] = {
    "improving": "Your scores are improving! Keep practicing.",
    "stable": "Your performance is consistent.",
    "declining": "Consider reviewing the fundamentals.",
    "insufficient_data": "Complete more attempts to see your progress.",
}


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _population_stddev(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    mean = _mean(values)
    return math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))


class StableScoreAggregator:
    """
    Conservative skill estimate from a history of noisy attempt scores.

    stable = mean - k' * stddev, where k' shrinks as attempts accumulate:
    one lucky attempt can't produce a high score, and a consistent
    history converges on its mean.
    """

    def __init__(self, base_k: Optional[float] = None,
                 trend_window: Optional[int] = None,
                 trend_delta: Optional[float] = None):
        self.base_k = Config.STABLE_BASE_K if base_k is None else base_k
        self.trend_window = Config.TREND_WINDOW if trend_window is None else trend_window
        self.trend_delta = Config.TREND_DELTA if trend_delta is None else trend_delta
        self.full_confidence_samples = Config.CONFIDENCE_FULL_SAMPLES

    def adaptive_k(self, sample_count: int, k: Optional[float] = None) -> float:
        if k is None:
            k = self.base_k
        if sample_count == 1:
            return k * Config.ADAPTIVE_K_SINGLE
        if sample_count == 2:
            return k * Config.ADAPTIVE_K_PAIR
        if sample_count >= Config.ADAPTIVE_K_MANY_MIN_SAMPLES:
            return k * Config.ADAPTIVE_K_MANY
        return k

    def detect_trend(self, raw_scores: Sequence[float]) -> Trend:
        """Compare the last `trend_window` scores against everything before them"""
        if len(raw_scores) < self.trend_window:
            return "insufficient_data"

        recent = raw_scores[-self.trend_window:]
        earlier = raw_scores[:-self.trend_window]
        if not earlier:
            return "insufficient_data"

        recent_avg = _mean(recent)
        earlier_avg = _mean(earlier)

        if recent_avg > earlier_avg + self.trend_delta:
            return "improving"
        elif recent_avg < earlier_avg - self.trend_delta:
            return "declining"
        return "stable"

    def calculate_stable_score(self, attempts: Sequence[AttemptScore], k: Optional[float] = None) -> StableScore:
        if not attempts:
            return StableScore(
                stable=0,
                mean=0,
                stddev=0.0,
                confidence=0.0,
                raw_scores=[],
                trend="insufficient_data",
            )

        raw_scores = [a.score for a in attempts]
        sample_count = len(raw_scores)
        mean = _mean(raw_scores)
        stddev = _population_stddev(raw_scores)

        stable = max(0, round_half_up(mean - self.adaptive_k(sample_count, k) * stddev))

        sample_size_factor = min(1.0, sample_count / self.full_confidence_samples)
        variability_factor = max(0.0, 1 - stddev / 100)
        confidence = sample_size_factor * variability_factor

        result = StableScore(
            stable=stable,
            mean=round_half_up(mean),
            stddev=round_half_up(stddev * 10) / 10,
            confidence=round_half_up(confidence * 100) / 100,
            raw_scores=raw_scores,
            trend=self.detect_trend(raw_scores),
        )
        logging.debug(
            f"Stable score {result.stable} from {sample_count} attempts "
            f"(mean {mean:.1f}, stddev {stddev:.1f}, trend {result.trend})"
        )
        return result

    def calculate_module_scores(self, recordings: Iterable[SkillRecording]) -> Dict[str, StableScore]:
        """Group a mixed recording history by skill and aggregate each group"""
        by_module: Dict[str, List[AttemptScore]] = {}
        for recording in recordings:
            if recording.ai_score is None:
                continue
            by_module.setdefault(recording.module_type, []).append(
                AttemptScore(
                    attempt_number=recording.attempt_number,
                    score=recording.ai_score,
                    timestamp=recording.created_at,
                )
            )

        return {module: self.calculate_stable_score(attempts) for module, attempts in by_module.items()}


def get_display_score(stable_score: StableScore) -> int:
    """Mean once the history is long and consistent, the conservative bound otherwise"""
    if (len(stable_score.raw_scores) >= Config.DISPLAY_MEAN_MIN_ATTEMPTS
            and stable_score.stddev < Config.DISPLAY_MEAN_MAX_STDDEV):
        return stable_score.mean
    return stable_score.stable


def get_confidence_band(stable_score: StableScore) -> Tuple[int, int]:
    lower = max(0, round_half_up(stable_score.mean - stable_score.stddev))
    upper = min(100, round_half_up(stable_score.mean + stable_score.stddev))
    return lower, upper


def get_trend_description(trend: Trend) -> str:
    return TREND_DESCRIPTIONS[trend]
