import logging
from typing import FrozenSet, List, Optional, Sequence, Tuple
from config import Config
from models import FluencyMetrics, PauseInterval, WordTimestamp
from services.fillers import get_filler_lexicon, is_filler

FLAG_TIMESTAMPS_MISSING = "asr_word_timestamps_missing"
FLAG_TOO_MANY_FILLERS = "filler_filter_removed_too_much"


class FluencyMetricsExtractor:
    def __init__(self, lexicon: Optional[FrozenSet[str]] = None):
        self.lexicon = lexicon if lexicon is not None else get_filler_lexicon()
        self.pause_threshold = Config.PAUSE_THRESHOLD
        self.long_pause_threshold = Config.LONG_PAUSE_THRESHOLD
        self.filler_ratio_warning = Config.FILLER_RATIO_WARNING

    def extract_metrics(self, words: Sequence[WordTimestamp],
                        total_duration: Optional[float] = None) -> FluencyMetrics:
        """Derive fluency metrics from the word timestamps of one utterance"""
        metrics, _ = self.extract_with_flags(words, total_duration)
        return metrics

    def extract_with_flags(self, words: Sequence[WordTimestamp],
                           total_duration: Optional[float] = None) -> Tuple[FluencyMetrics, List[str]]:
        """
        Same as extract_metrics, plus diagnostic flags about the input
        (missing timestamps, suspiciously high filler share).
        """
        debug_flags: List[str] = []

        if not words:
            debug_flags.append(FLAG_TIMESTAMPS_MISSING)
            return FluencyMetrics(total_duration=total_duration), debug_flags

        non_filler_words = [w for w in words if not is_filler(w.word, self.lexicon)]
        filler_count = len(words) - len(non_filler_words)
        filler_ratio = filler_count / len(words)

        if filler_ratio > self.filler_ratio_warning:
            debug_flags.append(FLAG_TOO_MANY_FILLERS)

        if not non_filler_words:
            metrics = FluencyMetrics(
                total_word_count=len(words),
                filler_count=filler_count,
                filler_ratio=filler_ratio,
                total_duration=total_duration,
                gross_wpm=0.0 if total_duration and total_duration > 0 else None,
            )
            return metrics, debug_flags

        # Speaking time: first to last non-filler word; a lone word has no span to measure
        speaking_time = 0.0
        if len(non_filler_words) > 1:
            speaking_time = max(0.0, non_filler_words[-1].end - non_filler_words[0].start)
        articulation_wpm = len(non_filler_words) / (speaking_time / 60.0) if speaking_time > 0 else 0.0

        gross_wpm = None
        if total_duration and total_duration > 0:
            gross_wpm = len(non_filler_words) / (total_duration / 60.0)

        # Pauses between consecutive non-filler words only
        pauses = []
        for previous, current in zip(non_filler_words, non_filler_words[1:]):
            gap = max(0.0, current.start - previous.end)
            if gap > self.pause_threshold:
                pauses.append(PauseInterval(start=previous.end, duration=gap, end=current.start))

        total_pause_duration = sum(p.duration for p in pauses)
        long_pause_count = sum(1 for p in pauses if p.duration > self.long_pause_threshold)
        max_pause = max((p.duration for p in pauses), default=0.0)

        # Fall back to speech + silence when the recording length is unknown
        if total_duration and total_duration > 0:
            ratio_base = total_duration
        else:
            ratio_base = speaking_time + total_pause_duration
        pause_ratio = total_pause_duration / ratio_base if ratio_base > 0 else 0.0

        metrics = FluencyMetrics(
            word_count=len(non_filler_words),
            total_word_count=len(words),
            filler_count=filler_count,
            filler_ratio=filler_ratio,
            speaking_time=speaking_time,
            total_duration=total_duration,
            articulation_wpm=articulation_wpm,
            gross_wpm=gross_wpm,
            pause_count=len(pauses),
            long_pause_count=long_pause_count,
            max_pause=max_pause,
            pause_ratio=pause_ratio,
            total_pause_duration=total_pause_duration,
            pauses=pauses,
        )

        logging.debug(
            f"Extracted metrics: {metrics.word_count} words, {metrics.articulation_wpm:.1f} wpm, "
            f"{metrics.long_pause_count} long pauses"
        )
        return metrics, debug_flags
