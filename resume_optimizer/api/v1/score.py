from typing import Any, Literal

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, Field

from resume_optimizer.core.rate_limit import rate_limit
from resume_optimizer.schemas.resume import ScoreBreakdown, SimulationResult
from resume_optimizer.scoring.session import ScoreSession

router = APIRouter()


class ScoreRequest(BaseModel):
    base_score: float = Field(ge=0, le=100)
    resume_content: str = ""
    # Either naming convention is accepted; normalization happens in the session.
    suggestions: list[dict[str, Any]] = Field(default_factory=list)
    keywords: list[dict[str, Any] | str] = Field(default_factory=list)


class SimulateRequest(ScoreRequest):
    kind: Literal["suggestion", "keyword"]
    index: int = Field(ge=0)


def _session(payload: ScoreRequest) -> ScoreSession:
    return ScoreSession(
        payload.base_score,
        payload.resume_content,
        payload.suggestions,
        payload.keywords,
    )


@router.post("/score", response_model=ScoreBreakdown)
@rate_limit()
async def score(request: Request, payload: ScoreRequest):
    _ = request
    return _session(payload).breakdown


@router.post("/score/simulate", response_model=SimulationResult)
@rate_limit()
async def simulate(request: Request, payload: SimulateRequest):
    _ = request
    session = _session(payload)
    if payload.kind == "suggestion":
        if payload.index >= len(session.suggestions):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Suggestion not found.")
        return session.simulate_suggestion_impact(payload.index)

    if payload.index >= len(session.keywords):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Keyword not found.")
    return session.simulate_keyword_impact(payload.index)
