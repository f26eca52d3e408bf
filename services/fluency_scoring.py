import logging
from typing import Optional, Sequence
from models import FluencyMetrics, FluencyScore, WordTimestamp
from services.fillers import get_filler_lexicon
from services.fluency_metrics import FluencyMetricsExtractor
from services.pacing import PacingScorer
from services.pause_analysis import PauseScorer


class FluencyScorer:
    """Speed (0-60) plus pause control (0-40), computed from word timings."""

    def __init__(self):
        self.pacing_scorer = PacingScorer()
        self.pause_scorer = PauseScorer()

    def calculate_fluency_score(self, metrics: FluencyMetrics) -> FluencyScore:
        speed_subscore = self.pacing_scorer.calculate_speed_subscore(metrics.articulation_wpm)
        pause_subscore = self.pause_scorer.calculate_pause_subscore(
            metrics.long_pause_count,
            metrics.max_pause,
            metrics.pause_ratio,
        )

        return FluencyScore(
            total=speed_subscore + pause_subscore,
            speed_subscore=speed_subscore,
            pause_subscore=pause_subscore,
            metrics=metrics,
            speed_band=self.pacing_scorer.speed_band_label(metrics.articulation_wpm),
            pacing_feedback=self.pacing_scorer.pacing_feedback(metrics.articulation_wpm),
            pause_explanation=self.pause_scorer.pause_explanation(
                metrics.long_pause_count,
                metrics.max_pause,
                metrics.pause_ratio,
            ),
        )

    def score_timestamps(self, words: Sequence[WordTimestamp],
                         total_duration: Optional[float] = None,
                         language: Optional[str] = None) -> FluencyScore:
        """Run filler filtering, metric extraction and scoring on one utterance"""
        extractor = FluencyMetricsExtractor(get_filler_lexicon(language))
        metrics, debug_flags = extractor.extract_with_flags(words, total_duration)

        score = self.calculate_fluency_score(metrics)
        logging.debug(
            f"Fluency score {score.total} (speed {score.speed_subscore}, pause {score.pause_subscore})"
        )
        return score.model_copy(update={"debug_flags": debug_flags})
