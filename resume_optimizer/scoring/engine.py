from __future__ import annotations

import math
from typing import Iterable, Sequence

from resume_optimizer.core.config import settings
from resume_optimizer.core.config.scoring import get_scoring_value
from resume_optimizer.schemas.resume import Keyword, ScoreBreakdown, Suggestion
from resume_optimizer.scoring.impact import (
    ImpactLevel,
    analyze_keyword_impact,
    analyze_suggestion_impact,
    get_impact_level,
    round_half_up,
    suggestion_category_weight,
)
from resume_optimizer.scoring.sections import evaluate_resume_sections

_SUGGESTION_MAX_POINTS = float(get_scoring_value("suggestions.max_points", 3.0))
_KEYWORD_MAX_POINTS = float(get_scoring_value("keywords.max_points", 2.0))
_BASE_DIVISOR = float(get_scoring_value("diminishing_returns.base_divisor", 120))
_MIN_FACTOR = float(get_scoring_value("diminishing_returns.min_factor", 0.1))
_POTENTIAL_ITEM_DIVISOR = float(get_scoring_value("diminishing_returns.potential_item_divisor", 20))


def _clamp_score(value: float) -> float:
    if value is None:
        return 0.0
    # Compare before converting so huge ints clamp instead of overflowing.
    if value > 100:
        return 100.0
    if value < 0 or not math.isfinite(value):
        return 0.0
    return float(value)


def _format_points(points: float) -> str:
    return f"{points:g}"


def calculate_suggestion_point_impact(suggestion: Suggestion) -> float:
    """ATS points a suggestion is worth, 0.1-3.0 before the category weight.

    The category weight is applied a second time here after already shaping the
    impact score, so high-weight categories are rewarded super-linearly.
    """
    impact_score = analyze_suggestion_impact(suggestion)
    base_points = (impact_score / 10) * _SUGGESTION_MAX_POINTS
    return round_half_up(base_points * suggestion_category_weight(suggestion.category), 1)


def calculate_keyword_point_impact(keyword: Keyword | str, resume_content: str) -> float:
    text = keyword if isinstance(keyword, str) else keyword.text
    impact = analyze_keyword_impact(text, resume_content).impact
    return round_half_up(impact * _KEYWORD_MAX_POINTS, 1)


def recompute_suggestion(suggestion: Suggestion) -> Suggestion:
    return suggestion.model_copy(
        update={
            "impact_score": analyze_suggestion_impact(suggestion),
            "point_impact": calculate_suggestion_point_impact(suggestion),
        }
    )


def recompute_keyword(keyword: Keyword, resume_content: str) -> Keyword:
    analysis = analyze_keyword_impact(keyword.text, resume_content)
    return keyword.model_copy(
        update={
            "category": analysis.category,
            "impact": analysis.impact,
            "point_impact": round_half_up(analysis.impact * _KEYWORD_MAX_POINTS, 1),
        }
    )


def process_suggestions(suggestions: Iterable[Suggestion]) -> list[Suggestion]:
    # Cached fields are refreshed, never trusted: they may predate a category or wording change.
    return [recompute_suggestion(suggestion) for suggestion in suggestions]


def process_keywords(keywords: Iterable[Keyword], resume_content: str) -> list[Keyword]:
    # Keyword impact depends on the content, so caches from older text are refreshed too.
    return [recompute_keyword(keyword, resume_content) for keyword in keywords]


def calculate_potential_points(
    unapplied_suggestions: Sequence[Suggestion],
    unapplied_keywords: Sequence[Keyword],
    resume_content: str,
) -> int:
    points = sum(calculate_suggestion_point_impact(s) for s in unapplied_suggestions)
    points += sum(calculate_keyword_point_impact(k, resume_content) for k in unapplied_keywords)

    item_count = len(unapplied_suggestions) + len(unapplied_keywords)
    factor = 1 / (1 + item_count / _POTENTIAL_ITEM_DIVISOR)
    return int(round_half_up(points * factor))


def calculate_detailed_ats_score(
    base_score: float,
    suggestions: Sequence[Suggestion],
    keywords: Sequence[Keyword],
    resume_content: str,
    *,
    structural: bool | None = None,
) -> ScoreBreakdown:
    """Single authoritative score computation. Pure: inputs are never mutated."""
    base = _clamp_score(base_score)
    content = resume_content or ""
    processed_suggestions = process_suggestions(suggestions)
    processed_keywords = process_keywords(keywords, content)

    applied_suggestion_points = sum(calculate_suggestion_point_impact(s) for s in processed_suggestions if s.is_applied)
    applied_keyword_points = sum(calculate_keyword_point_impact(k, content) for k in processed_keywords if k.is_applied)

    # Higher base scores compress further gains.
    factor = max(_MIN_FACTOR, 1 - base / _BASE_DIVISOR)
    suggestion_points = int(round_half_up(applied_suggestion_points * factor))
    keyword_points = int(round_half_up(applied_keyword_points * factor))

    total = int(min(100, round_half_up(base + suggestion_points + keyword_points)))
    potential_points = calculate_potential_points(
        [s for s in processed_suggestions if not s.is_applied],
        [k for k in processed_keywords if not k.is_applied],
        content,
    )
    potential = min(100, total + potential_points)

    if structural is None:
        structural = settings.section_scoring_mode == "structural"

    return ScoreBreakdown(
        base=base,
        suggestion_points=suggestion_points,
        keyword_points=keyword_points,
        total=total,
        potential=potential,
        section_scores=evaluate_resume_sections(content, structural=structural),
    )


def get_suggestion_impact_description(suggestion: Suggestion) -> str:
    impact_score = analyze_suggestion_impact(suggestion)
    points = _format_points(calculate_suggestion_point_impact(suggestion))
    if impact_score >= 8:
        return f"Critical improvement (+{points} points)"
    if impact_score >= 6:
        return f"Major improvement (+{points} points)"
    if impact_score >= 4:
        return f"Good improvement (+{points} points)"
    return f"Minor improvement (+{points} points)"


def get_keyword_impact_description(keyword: Keyword, resume_content: str) -> str:
    impact = analyze_keyword_impact(keyword.text, resume_content).impact
    points = _format_points(calculate_keyword_point_impact(keyword, resume_content))
    labels = {
        ImpactLevel.CRITICAL: "Essential keyword",
        ImpactLevel.HIGH: "High-impact keyword",
        ImpactLevel.MEDIUM: "Helpful keyword",
        ImpactLevel.LOW: "Minor keyword",
    }
    return f"{labels[get_impact_level(impact)]} (+{points} points)"
