import logging
from config import Config

class PauseScorer:
    def __init__(self):
        self.max_score = Config.PAUSE_MAX_SCORE
        self.long_pause_threshold = Config.LONG_PAUSE_THRESHOLD
        self.long_pause_penalty = Config.LONG_PAUSE_PENALTY
        self.long_pause_penalty_cap = Config.LONG_PAUSE_PENALTY_CAP
        self.max_pause_threshold = Config.MAX_PAUSE_PENALTY_THRESHOLD
        self.max_pause_penalty = Config.MAX_PAUSE_PENALTY
        self.pause_ratio_threshold = Config.PAUSE_RATIO_THRESHOLD
        self.pause_ratio_penalty = Config.PAUSE_RATIO_PENALTY

    def calculate_pause_subscore(self, long_pause_count: int, max_pause: float, pause_ratio: float) -> int:
        """
        Pause-control subscore (0-40).

        Penalties are summed first and the result floored once, so the
        count-based cap and the two threshold penalties can all co-occur.
        """
        penalty = min(long_pause_count * self.long_pause_penalty, self.long_pause_penalty_cap)

        if max_pause > self.max_pause_threshold:
            penalty += self.max_pause_penalty

        if pause_ratio > self.pause_ratio_threshold:
            penalty += self.pause_ratio_penalty

        score = max(0, self.max_score - penalty)
        logging.debug(f"Pause subscore {score} (penalty {penalty})")
        return score

    def pause_explanation(self, long_pause_count: int, max_pause: float, pause_ratio: float) -> str:
        parts = []

        if long_pause_count > 0:
            plural = "s" if long_pause_count > 1 else ""
            parts.append(f"{long_pause_count} long pause{plural} (>{self.long_pause_threshold}s)")

        if max_pause > self.max_pause_threshold:
            parts.append(f"max pause {max_pause:.1f}s (>{self.max_pause_threshold}s penalty)")

        if pause_ratio > self.pause_ratio_threshold:
            parts.append(
                f"pause ratio {pause_ratio * 100:.0f}% (>{self.pause_ratio_threshold * 100:.0f}% penalty)"
            )

        if not parts:
            return "Good pause control"

        return "; ".join(parts)
