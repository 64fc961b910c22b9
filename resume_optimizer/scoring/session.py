from __future__ import annotations

import logging
import math
from typing import Any, Callable, Iterable, Mapping

from pydantic import BaseModel

from resume_optimizer.schemas.resume import Keyword, ScoreBreakdown, SimulationResult, Suggestion
from resume_optimizer.scoring import engine
from resume_optimizer.scoring.impact import ImpactLevel, get_impact_level
from resume_optimizer.scoring.normalize import normalize_keywords, normalize_suggestions

logger = logging.getLogger(__name__)


def _is_valid_base_score(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # Range check before isfinite, which overflows on huge ints.
    if not 0 <= value <= 100:
        return False
    return math.isfinite(value)


class SuggestionImpactDetails(BaseModel):
    score: int
    point_impact: float
    level: ImpactLevel
    description: str


class KeywordImpactDetails(BaseModel):
    impact: float
    point_impact: float
    level: ImpactLevel
    description: str
    category: str


class ScoreSession:
    """Live ATS score for one resume while the user toggles suggestions and keywords.

    A session is owned by a single request or UI context and is not safe for
    concurrent mutation. Every public mutator returns the new total score.
    """

    def __init__(
        self,
        base_score: float,
        resume_content: str,
        suggestions: Iterable[Suggestion | Mapping[str, Any]] | None = None,
        keywords: Iterable[Keyword | Mapping[str, Any] | str] | None = None,
        *,
        on_score_change: Callable[[int], None] | None = None,
        structural: bool | None = None,
    ):
        self._base_score = float(base_score)
        self._content = resume_content or ""
        self._on_score_change = on_score_change
        self._structural = structural
        self._suggestions = engine.process_suggestions(normalize_suggestions(list(suggestions or [])))
        self._keywords = engine.process_keywords(normalize_keywords(list(keywords or [])), self._content)
        self._breakdown: ScoreBreakdown = self._compute(self._suggestions, self._keywords)
        self._current_score = self._breakdown.total
        if self._on_score_change is not None:
            self._on_score_change(self._current_score)
        logger.debug(
            "score_session_initialized base=%s current=%s suggestions=%s keywords=%s",
            self._base_score,
            self._current_score,
            len(self._suggestions),
            len(self._keywords),
        )

    @property
    def base_score(self) -> float:
        return self._base_score

    @property
    def current_score(self) -> int:
        return self._current_score

    @property
    def resume_content(self) -> str:
        return self._content

    @property
    def breakdown(self) -> ScoreBreakdown:
        return self._breakdown

    @property
    def potential_score(self) -> int:
        return self.breakdown.potential

    @property
    def suggestions(self) -> list[Suggestion]:
        return [s.model_copy() for s in self._suggestions]

    @property
    def keywords(self) -> list[Keyword]:
        return [k.model_copy() for k in self._keywords]

    def _compute(self, suggestions: list[Suggestion], keywords: list[Keyword]) -> ScoreBreakdown:
        return engine.calculate_detailed_ats_score(
            self._base_score,
            suggestions,
            keywords,
            self._content,
            structural=self._structural,
        )

    def _recalculate(self) -> int:
        self._breakdown = self._compute(self._suggestions, self._keywords)
        self._current_score = self._breakdown.total
        if self._on_score_change is not None:
            self._on_score_change(self._current_score)
        logger.debug(
            "score_recalculated base=%s total=%s suggestion_points=%s keyword_points=%s potential=%s",
            self._base_score,
            self._breakdown.total,
            self._breakdown.suggestion_points,
            self._breakdown.keyword_points,
            self._breakdown.potential,
        )
        return self._current_score

    def _valid_index(self, index: int, items: list[Any], kind: str) -> bool:
        if 0 <= index < len(items):
            return True
        logger.warning("score_session_invalid_index kind=%s index=%s size=%s", kind, index, len(items))
        return False

    def update_state(
        self,
        base_score: float | None = None,
        resume_content: str | None = None,
        suggestions: Iterable[Suggestion | Mapping[str, Any]] | None = None,
        keywords: Iterable[Keyword | Mapping[str, Any] | str] | None = None,
    ) -> int:
        changed = False
        content_changed = False

        if base_score is not None and base_score != self._base_score:
            if _is_valid_base_score(base_score):
                self._base_score = float(base_score)
                changed = True
            else:
                logger.warning("score_session_invalid_base_score value=%r", base_score)

        if resume_content is not None and resume_content != self._content:
            self._content = resume_content
            changed = content_changed = True

        if suggestions is not None:
            self._suggestions = engine.process_suggestions(normalize_suggestions(list(suggestions)))
            changed = True

        if keywords is not None:
            self._keywords = engine.process_keywords(normalize_keywords(list(keywords)), self._content)
            changed = True
        elif content_changed:
            self._keywords = [engine.recompute_keyword(k, self._content) for k in self._keywords]

        if changed:
            return self._recalculate()
        return self._current_score

    def apply_suggestion(self, index: int) -> int:
        """Toggle one suggestion's applied flag."""
        if not self._valid_index(index, self._suggestions, "suggestion"):
            return self._current_score
        current = self._suggestions[index]
        self._suggestions[index] = current.model_copy(update={"is_applied": not current.is_applied})
        return self._recalculate()

    def apply_keyword(self, index: int) -> int:
        """Toggle one keyword's applied flag."""
        if not self._valid_index(index, self._keywords, "keyword"):
            return self._current_score
        current = self._keywords[index]
        self._keywords[index] = current.model_copy(update={"is_applied": not current.is_applied})
        return self._recalculate()

    def simulate_suggestion_impact(self, index: int) -> SimulationResult:
        if not self._valid_index(index, self._suggestions, "suggestion"):
            return SimulationResult(new_score=self._current_score, point_impact=0, description="Invalid suggestion")

        suggestion = self._suggestions[index]
        if suggestion.is_applied:
            return SimulationResult(new_score=self._current_score, point_impact=0, description="Already applied")

        simulated = list(self._suggestions)
        simulated[index] = suggestion.model_copy(update={"is_applied": True})
        breakdown = self._compute(simulated, self._keywords)
        return SimulationResult(
            new_score=breakdown.total,
            point_impact=suggestion.point_impact or engine.calculate_suggestion_point_impact(suggestion),
            description=engine.get_suggestion_impact_description(suggestion),
        )

    def simulate_keyword_impact(self, index: int) -> SimulationResult:
        if not self._valid_index(index, self._keywords, "keyword"):
            return SimulationResult(new_score=self._current_score, point_impact=0, description="Invalid keyword")

        keyword = self._keywords[index]
        if keyword.is_applied:
            return SimulationResult(new_score=self._current_score, point_impact=0, description="Already applied")

        simulated = list(self._keywords)
        simulated[index] = keyword.model_copy(update={"is_applied": True})
        breakdown = self._compute(self._suggestions, simulated)
        return SimulationResult(
            new_score=breakdown.total,
            point_impact=keyword.point_impact or engine.calculate_keyword_point_impact(keyword, self._content),
            description=engine.get_keyword_impact_description(keyword, self._content),
        )

    def apply_all_suggestions(self) -> int:
        self._suggestions = [s.model_copy(update={"is_applied": True}) for s in self._suggestions]
        return self._recalculate()

    def apply_all_keywords(self) -> int:
        self._keywords = [k.model_copy(update={"is_applied": True}) for k in self._keywords]
        return self._recalculate()

    def reset_all_changes(self) -> int:
        self._suggestions = [s.model_copy(update={"is_applied": False}) for s in self._suggestions]
        self._keywords = [k.model_copy(update={"is_applied": False}) for k in self._keywords]
        return self._recalculate()

    def applied_suggestions(self) -> list[Suggestion]:
        return [s.model_copy() for s in self._suggestions if s.is_applied]

    def applied_keywords(self) -> list[Keyword]:
        return [k.model_copy() for k in self._keywords if k.is_applied]

    def update_content(self, content: str) -> int:
        if content == self._content:
            return self._current_score
        self._content = content or ""
        # Keyword impact depends on whether the term is already in the text.
        self._keywords = [engine.recompute_keyword(k, self._content) for k in self._keywords]
        return self._recalculate()

    def update_base_score(self, new_base_score: Any) -> int:
        """Replace the base with an externally supplied authoritative score.

        Applied suggestion and keyword effects are re-added on top of it.
        Non-numeric or out-of-range values are ignored.
        """
        if not _is_valid_base_score(new_base_score):
            logger.warning("score_session_invalid_base_score value=%r", new_base_score)
            return self._current_score

        logger.info("score_session_base_score_updated old=%s new=%s", self._base_score, new_base_score)
        self._base_score = float(new_base_score)
        self._current_score = int(new_base_score)
        return self._recalculate()

    def suggestion_impact_details(self, index: int) -> SuggestionImpactDetails:
        if not self._valid_index(index, self._suggestions, "suggestion"):
            return SuggestionImpactDetails(
                score=0, point_impact=0, level=ImpactLevel.LOW, description="Invalid suggestion"
            )
        suggestion = engine.recompute_suggestion(self._suggestions[index])
        score = suggestion.impact_score
        return SuggestionImpactDetails(
            score=score,
            point_impact=suggestion.point_impact,
            level=get_impact_level(score / 10),
            description=engine.get_suggestion_impact_description(suggestion),
        )

    def keyword_impact_details(self, index: int) -> KeywordImpactDetails:
        if not self._valid_index(index, self._keywords, "keyword"):
            return KeywordImpactDetails(
                impact=0,
                point_impact=0,
                level=ImpactLevel.LOW,
                description="Invalid keyword",
                category="unknown",
            )
        keyword = engine.recompute_keyword(self._keywords[index], self._content)
        return KeywordImpactDetails(
            impact=keyword.impact,
            point_impact=keyword.point_impact,
            level=get_impact_level(keyword.impact),
            description=engine.get_keyword_impact_description(keyword, self._content),
            category=keyword.category,
        )

    def suggestions_with_impact(self) -> list[dict[str, Any]]:
        rows = []
        for index, suggestion in enumerate(self._suggestions):
            details = self.suggestion_impact_details(index)
            rows.append({**suggestion.model_dump(), "level": details.level, "description": details.description})
        return rows

    def keywords_with_impact(self) -> list[dict[str, Any]]:
        rows = []
        for index, keyword in enumerate(self._keywords):
            details = self.keyword_impact_details(index)
            rows.append({**keyword.model_dump(), "level": details.level, "description": details.description})
        return rows
