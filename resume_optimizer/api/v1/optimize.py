from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from resume_optimizer.core.config import settings
from resume_optimizer.core.rate_limit import rate_limit
from resume_optimizer.schemas.resume import (
    OptimizationOptions,
    OptimizationResult,
    ReoptimizationRequest,
    ScoreBreakdown,
)
from resume_optimizer.scoring.session import ScoreSession

router = APIRouter()


class OptimizeRequest(BaseModel):
    resume_text: str = ""
    language: str | None = None
    options: OptimizationOptions = Field(default_factory=OptimizationOptions)


class OptimizeResponse(BaseModel):
    result: OptimizationResult
    score: ScoreBreakdown


def _respond(result: OptimizationResult) -> OptimizeResponse:
    # Nothing is applied yet, so the breakdown only carries base, potential and sections.
    session = ScoreSession(
        result.ats_score,
        result.optimized_text,
        result.suggestions,
        result.keyword_suggestions,
    )
    return OptimizeResponse(result=result, score=session.breakdown)


# EmptyResumeError from the orchestrator is mapped to 422 by the app-level handler.
@router.post("/optimize", response_model=OptimizeResponse)
@rate_limit(settings.optimize_rate_limit)
async def optimize(request: Request, payload: OptimizeRequest):
    orchestrator = request.app.state.orchestrator
    result = await orchestrator.optimize(payload.resume_text, payload.language, payload.options)
    return _respond(result)


@router.post("/reoptimize", response_model=OptimizeResponse)
@rate_limit(settings.optimize_rate_limit)
async def reoptimize(request: Request, payload: ReoptimizationRequest):
    result = await request.app.state.orchestrator.reoptimize(payload)
    return _respond(result)
