from __future__ import annotations

import time
from collections import Counter

from pydantic import BaseModel, Field

from resume_optimizer.scoring.session import ScoreSession


class OptimizationMetrics(BaseModel):
    initial_score: float
    final_score: int
    improvement: float
    applied_suggestion_count: int
    applied_keyword_count: int
    suggestion_categories: dict[str, int] = Field(default_factory=dict)
    keyword_categories: dict[str, int] = Field(default_factory=dict)
    seconds_elapsed: int
    sections_improved: list[str] = Field(default_factory=list)


def build_optimization_metrics(
    session: ScoreSession,
    *,
    initial_score: float | None = None,
    started_at: float | None = None,
) -> OptimizationMetrics:
    """Summarize what the user applied during a session.

    ``started_at`` is a ``time.monotonic()`` reading taken when the session began.
    """
    initial = session.base_score if initial_score is None else initial_score
    applied_suggestions = session.applied_suggestions()
    applied_keywords = session.applied_keywords()

    sections: list[str] = []
    for suggestion in applied_suggestions:
        if suggestion.section and suggestion.section not in sections:
            sections.append(suggestion.section)

    elapsed = 0 if started_at is None else max(0, round(time.monotonic() - started_at))

    return OptimizationMetrics(
        initial_score=initial,
        final_score=session.current_score,
        improvement=session.current_score - initial,
        applied_suggestion_count=len(applied_suggestions),
        applied_keyword_count=len(applied_keywords),
        suggestion_categories=dict(Counter(s.category for s in applied_suggestions)),
        keyword_categories=dict(Counter(k.category or "general" for k in applied_keywords)),
        seconds_elapsed=elapsed,
        sections_improved=sections,
    )
