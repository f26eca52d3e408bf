from dotenv import load_dotenv
import os

load_dotenv()

# Configuration class for the scoring engine
class Config:
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Filler lexicon used when a request does not name a language
    FILLER_LANGUAGE = os.getenv("FILLER_LANGUAGE", "fr").lower()
    FILLER_RATIO_WARNING = 0.3

    # Pause detection thresholds (seconds)
    PAUSE_THRESHOLD = 0.3
    LONG_PAUSE_THRESHOLD = 1.2

    # Speed subscore
    SPEED_MAX_SCORE = 60
    SPEED_SATURATION_WPM = 140

    # Pause-control subscore
    PAUSE_MAX_SCORE = 40
    LONG_PAUSE_PENALTY = 5
    LONG_PAUSE_PENALTY_CAP = 20
    MAX_PAUSE_PENALTY_THRESHOLD = 2.5  # seconds
    MAX_PAUSE_PENALTY = 10
    PAUSE_RATIO_THRESHOLD = 0.35
    PAUSE_RATIO_PENALTY = 10

    # Stable score aggregation
    STABLE_BASE_K = float(os.getenv("STABLE_BASE_K", "1.0"))
    # sample count -> multiplier applied to k
    ADAPTIVE_K_SINGLE = 1.5
    ADAPTIVE_K_PAIR = 1.2
    ADAPTIVE_K_MANY = 0.7
    ADAPTIVE_K_MANY_MIN_SAMPLES = 5
    CONFIDENCE_FULL_SAMPLES = 5
    TREND_WINDOW = int(os.getenv("TREND_WINDOW", "3"))
    TREND_DELTA = float(os.getenv("TREND_DELTA", "5"))

    # Display policy: switch from the conservative bound to the mean
    DISPLAY_MEAN_MIN_ATTEMPTS = 5
    DISPLAY_MEAN_MAX_STDDEV = 5.0

    if STABLE_BASE_K < 0:
        raise ValueError("STABLE_BASE_K must not be negative")

    if TREND_WINDOW < 1:
        raise ValueError("TREND_WINDOW must be at least 1")
