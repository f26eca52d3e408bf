import logging
from typing import NamedTuple, Tuple
from config import Config
from services.rounding import round_half_up


class SpeedBand(NamedTuple):
    min: float
    max: float
    score: int  # ceiling reached at the top of the band


# Articulation WPM bands, score interpolated from the previous ceiling
SPEED_BANDS: Tuple[SpeedBand, ...] = (
    SpeedBand(0, 45, 10),
    SpeedBand(45, 65, 25),
    SpeedBand(65, 85, 40),
    SpeedBand(85, 110, 55),
    SpeedBand(110, 140, 60),
)


class PacingScorer:
    def __init__(self):
        self.bands = SPEED_BANDS
        self.max_score = Config.SPEED_MAX_SCORE
        self.saturation_wpm = Config.SPEED_SATURATION_WPM

    def calculate_speed_subscore(self, articulation_wpm: float) -> int:
        """Speed subscore (0-60) from articulation WPM"""
        if articulation_wpm <= 0:
            return 0
        if articulation_wpm >= self.saturation_wpm:
            return self.max_score

        previous_score = 0
        for band in self.bands:
            if band.min <= articulation_wpm < band.max:
                position = (articulation_wpm - band.min) / (band.max - band.min)
                score = round_half_up(previous_score + position * (band.score - previous_score))
                logging.debug(f"Speed subscore {score} for {articulation_wpm:.1f} wpm")
                return score
            previous_score = band.score

        return self.max_score

    def speed_band_label(self, articulation_wpm: float) -> str:
        for band in self.bands:
            if band.min <= articulation_wpm < band.max:
                return f"{band.min}-{band.max} WPM"
        if articulation_wpm < 0:
            return f"{self.bands[0].min}-{self.bands[0].max} WPM"
        return f"{self.saturation_wpm}+ WPM"

    def pacing_feedback(self, articulation_wpm: float) -> str:
        if articulation_wpm <= 0:
            return "Unable to calculate pacing."
        if articulation_wpm < self.bands[1].max:
            return "Your speaking pace is slow. Try to link words into longer phrases."
        if articulation_wpm < self.bands[3].min:
            return "Your speaking pace is moderate. Keep building speed."
        return "Your speaking pace is brisk and controlled."
