from __future__ import annotations

import math
import re
from enum import Enum

from pydantic import BaseModel

from resume_optimizer.core.config.scoring import get_scoring_value
from resume_optimizer.schemas.resume import Suggestion

SUGGESTION_CATEGORY_WEIGHTS: dict[str, float] = dict(get_scoring_value("suggestions.category_weights", {}))
DEFAULT_SUGGESTION_WEIGHT: float = float(get_scoring_value("suggestions.default_category_weight", 0.6))
IMPACT_VOCABULARY: tuple[tuple[str, int], ...] = tuple(
    (str(word), int(value)) for word, value in get_scoring_value("suggestions.impact_vocabulary", [])
)

KEYWORD_CATEGORY_WEIGHTS: dict[str, float] = dict(get_scoring_value("keywords.category_weights", {}))
DEFAULT_KEYWORD_WEIGHT: float = float(get_scoring_value("keywords.default_category_weight", 0.5))
EXISTING_KEYWORD_PENALTY: float = float(get_scoring_value("keywords.existing_penalty", 0.3))
MIN_KEYWORD_IMPACT: float = float(get_scoring_value("keywords.min_impact", 0.1))

_METRIC_PATTERN = re.compile(
    r"\d+\s*%|\d+\s*percent|\$\s?\d|\bdoubles?\b|\btriples?\b|increases? by \d+",
    re.IGNORECASE,
)
_ATS_PATTERN = re.compile(
    r"\bats\b|applicant tracking|\bpars(?:e|er|ers|ing|ed)\b|algorithm|\bscan",
    re.IGNORECASE,
)

# Checked in this order, first match wins.
_KEYWORD_FAMILIES: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "technical",
        re.compile(
            r"\b(api|sdk|framework|language|programming|software|hardware|tool|platform|database|"
            r"system|algorithm|analysis|design|development|engineering|implementation|integration|"
            r"interface|methodology|application|architecture|automation)\b",
            re.IGNORECASE,
        ),
    ),
    (
        "soft-skill",
        re.compile(
            r"\b(communication|leadership|teamwork|collaboration|problem.solving|adaptability|"
            r"creativity|critical.thinking|time.management|flexibility|organization|"
            r"attention.to.detail|interpersonal|management|coordination|facilitation)\b",
            re.IGNORECASE,
        ),
    ),
    (
        "action-verb",
        re.compile(
            r"\b(managed|developed|created|implemented|designed|led|coordinated|achieved|improved|"
            r"increased|decreased|reduced|launched|delivered|established|generated|negotiated|"
            r"resolved|transformed)\b",
            re.IGNORECASE,
        ),
    ),
    (
        "industry-specific",
        re.compile(
            r"\b(compliance|regulation|protocol|industry.standard|certification|methodology|"
            r"framework|best.practice)\b",
            re.IGNORECASE,
        ),
    ),
)


class ImpactLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class KeywordImpact(BaseModel):
    category: str
    impact: float


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positive values (2.5 -> 3, 0.25 -> 0.3)."""
    scale = 10 ** digits
    # The epsilon absorbs binary noise such as 1.2000000000000002 * 10.
    return math.floor(value * scale + 0.5 + 1e-9) / scale


def suggestion_category_weight(category: str | None) -> float:
    return SUGGESTION_CATEGORY_WEIGHTS.get((category or "").lower(), DEFAULT_SUGGESTION_WEIGHT)


def keyword_category_weight(category: str | None) -> float:
    return KEYWORD_CATEGORY_WEIGHTS.get((category or "").lower(), DEFAULT_KEYWORD_WEIGHT)


def analyze_suggestion_impact(suggestion: Suggestion) -> int:
    """Infer a 1-10 impact score from the suggestion category and impact text."""
    score = round_half_up(suggestion_category_weight(suggestion.category) * 10)
    description = (suggestion.impact_description or "").lower()

    for word, value in IMPACT_VOCABULARY:
        if word in description:
            score += (value - score) * 0.5
            break

    if _METRIC_PATTERN.search(description):
        score += 1
    if _ATS_PATTERN.search(description):
        score += 1

    return int(max(1, min(10, round_half_up(score))))


def keyword_present(keyword_text: str, resume_content: str) -> bool:
    """Whole-word, case-insensitive containment check."""
    needle = (keyword_text or "").strip()
    if not needle or not resume_content:
        return False
    pattern = re.compile(rf"(?<!\w){re.escape(needle)}(?!\w)", re.IGNORECASE)
    return pattern.search(resume_content) is not None


def classify_keyword(keyword_text: str) -> str:
    for category, pattern in _KEYWORD_FAMILIES:
        if pattern.search(keyword_text or ""):
            return category
    return "general"


def analyze_keyword_impact(keyword_text: str, resume_content: str) -> KeywordImpact:
    category = classify_keyword(keyword_text)
    penalty = EXISTING_KEYWORD_PENALTY if keyword_present(keyword_text, resume_content) else 0.0
    impact = min(1.0, max(MIN_KEYWORD_IMPACT, keyword_category_weight(category) - penalty))
    return KeywordImpact(category=category, impact=round(impact, 4))


def get_impact_level(score: float) -> ImpactLevel:
    if score >= float(get_scoring_value("impact_levels.critical", 0.8)):
        return ImpactLevel.CRITICAL
    if score >= float(get_scoring_value("impact_levels.high", 0.6)):
        return ImpactLevel.HIGH
    if score >= float(get_scoring_value("impact_levels.medium", 0.4)):
        return ImpactLevel.MEDIUM
    return ImpactLevel.LOW
