import uuid
import logging
from fastapi import FastAPI, HTTPException

from config import Config
from models import (
    FluencyScore,
    FluencyScoreRequest,
    ModuleScoresRequest,
    ModuleScoresResponse,
    StableScoreRequest,
    StableScoreResponse,
    SubscoreRequest,
    SubscoreResponse,
)
from services.fluency_scoring import FluencyScorer
from services.stable_score import (
    StableScoreAggregator,
    get_confidence_band,
    get_display_score,
    get_trend_description,
)

# Configure logging
logging.basicConfig(level=Config.LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')

app = FastAPI(title="Speech Assessment Scoring Engine", version="1.0.0")

# Scorers are stateless past construction and safe to share between requests
fluency_scorer = FluencyScorer()
stable_aggregator = StableScoreAggregator()


@app.post("/fluency/score", response_model=FluencyScore)
async def score_fluency(request: FluencyScoreRequest):
    """
    Scores one utterance from its word timestamps.
    """
    request_id = str(uuid.uuid4())[:8]
    logging.info(f"[{request_id}] Scoring fluency for {len(request.words)} words")
    try:
        result = fluency_scorer.score_timestamps(
            request.words,
            total_duration=request.total_duration,
            language=request.language,
        )
    except Exception as e:
        logging.error(f"[{request_id}] Fluency scoring error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to score fluency: {str(e)}")

    if result.debug_flags:
        logging.warning(f"[{request_id}] Debug flags: {', '.join(result.debug_flags)}")
    logging.info(f"[{request_id}] Fluency score {result.total} ({result.speed_band})")
    return result


@app.post("/fluency/subscores", response_model=SubscoreResponse)
async def score_subscores(request: SubscoreRequest):
    """
    Scores precomputed metrics, bypassing timestamp extraction.
    """
    request_id = str(uuid.uuid4())[:8]
    logging.info(f"[{request_id}] Scoring subscores for {request.articulation_wpm:.1f} wpm")
    pacing = fluency_scorer.pacing_scorer
    pauses = fluency_scorer.pause_scorer
    try:
        speed = pacing.calculate_speed_subscore(request.articulation_wpm)
        pause = pauses.calculate_pause_subscore(request.long_pause_count, request.max_pause, request.pause_ratio)
        response = SubscoreResponse(
            speed_subscore=speed,
            pause_subscore=pause,
            total=speed + pause,
            speed_band=pacing.speed_band_label(request.articulation_wpm),
            pacing_feedback=pacing.pacing_feedback(request.articulation_wpm),
            pause_explanation=pauses.pause_explanation(
                request.long_pause_count, request.max_pause, request.pause_ratio
            ),
        )
    except Exception as e:
        logging.error(f"[{request_id}] Subscore error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to score subscores: {str(e)}")

    logging.info(f"[{request_id}] Subscores {response.speed_subscore} + {response.pause_subscore}")
    return response


@app.post("/scores/stable", response_model=StableScoreResponse)
async def stable_score(request: StableScoreRequest):
    """
    Aggregates the attempt history of one skill into a stable estimate.
    """
    request_id = str(uuid.uuid4())[:8]
    logging.info(f"[{request_id}] Aggregating {len(request.attempts)} attempts")
    try:
        result = stable_aggregator.calculate_stable_score(request.attempts, k=request.k)
    except Exception as e:
        logging.error(f"[{request_id}] Aggregation error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to aggregate scores: {str(e)}")

    logging.info(f"[{request_id}] Stable score {result.stable}, trend {result.trend}")
    return StableScoreResponse(
        stable_score=result,
        display_score=get_display_score(result),
        confidence_band=get_confidence_band(result),
        trend_description=get_trend_description(result.trend),
    )


@app.post("/scores/modules", response_model=ModuleScoresResponse)
async def module_scores(request: ModuleScoresRequest):
    """
    Aggregates a mixed recording history into one stable score per skill.
    """
    request_id = str(uuid.uuid4())[:8]
    logging.info(f"[{request_id}] Aggregating {len(request.recordings)} recordings by module")
    try:
        modules = stable_aggregator.calculate_module_scores(request.recordings)
    except Exception as e:
        logging.error(f"[{request_id}] Module aggregation error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to aggregate module scores: {str(e)}")

    return ModuleScoresResponse(modules=modules)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "Speech Assessment Scoring Engine is running"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
