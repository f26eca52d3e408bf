from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Literal, Optional, Tuple

Trend = Literal["improving", "stable", "declining", "insufficient_data"]


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class WordTimestamp(FrozenModel):
    word: str
    start: float
    end: float

class PauseInterval(FrozenModel):
    start: float
    duration: float
    end: float

class FluencyMetrics(FrozenModel):
    word_count: int = 0  # non-filler words
    total_word_count: int = 0
    filler_count: int = 0
    filler_ratio: float = 0.0
    speaking_time: float = 0.0
    total_duration: Optional[float] = None
    articulation_wpm: float = 0.0
    gross_wpm: Optional[float] = None
    pause_count: int = 0
    long_pause_count: int = 0
    max_pause: float = 0.0
    pause_ratio: float = 0.0
    total_pause_duration: float = 0.0
    pauses: List[PauseInterval] = Field(default_factory=list)

class FluencyScore(FrozenModel):
    total: int
    speed_subscore: int
    pause_subscore: int
    metrics: FluencyMetrics
    speed_band: str
    pacing_feedback: str
    pause_explanation: str
    debug_flags: List[str] = Field(default_factory=list)

class AttemptScore(FrozenModel):
    attempt_number: int = Field(ge=1)
    score: float = Field(ge=0, le=100)
    timestamp: str

class StableScore(FrozenModel):
    stable: int
    mean: int
    stddev: float
    confidence: float
    raw_scores: List[float] = Field(default_factory=list)
    trend: Trend

class SkillRecording(FrozenModel):
    module_type: str
    attempt_number: int = Field(ge=1)
    ai_score: Optional[float] = Field(default=None, ge=0, le=100)
    created_at: str


# Request / response payloads for the HTTP layer

class FluencyScoreRequest(BaseModel):
    words: List[WordTimestamp]
    total_duration: Optional[float] = None
    language: Optional[str] = None

class SubscoreRequest(BaseModel):
    articulation_wpm: float
    long_pause_count: int = Field(ge=0)
    max_pause: float = Field(ge=0)
    pause_ratio: float = Field(ge=0)

class SubscoreResponse(BaseModel):
    speed_subscore: int
    pause_subscore: int
    total: int
    speed_band: str
    pacing_feedback: str
    pause_explanation: str

class StableScoreRequest(BaseModel):
    attempts: List[AttemptScore]
    k: Optional[float] = Field(default=None, ge=0)

class StableScoreResponse(BaseModel):
    stable_score: StableScore
    display_score: int
    confidence_band: Tuple[int, int]
    trend_description: str

class ModuleScoresRequest(BaseModel):
    recordings: List[SkillRecording]

class ModuleScoresResponse(BaseModel):
    modules: Dict[str, StableScore]
