from __future__ import annotations

import re

from bs4 import BeautifulSoup

from resume_optimizer.core.config.scoring import get_scoring_value

SECTION_WEIGHTS: dict[str, float] = dict(get_scoring_value("sections.weights", {}))

_BASE_SCORE = int(get_scoring_value("sections.base_score", 50))
_LENGTH_BONUSES: tuple[tuple[int, int], ...] = tuple(
    (int(threshold), int(bonus)) for threshold, bonus in get_scoring_value("sections.length_bonuses", [])
)
_LIST_BONUS = int(get_scoring_value("sections.list_bonus", 10))
_METRIC_BONUS = int(get_scoring_value("sections.metric_bonus", 15))
_MARKER_SCORE = int(get_scoring_value("sections.marker_score", 70))

_SECTION_METRIC_PATTERN = re.compile(r"\d+\s*%|\$\s?\d+|\d+ percent|\d+ times", re.IGNORECASE)


def _score_section_text(text: str, has_list_items: bool) -> int:
    score = _BASE_SCORE
    length = len(text)
    for threshold, bonus in _LENGTH_BONUSES:
        if length > threshold:
            score += bonus
            break
    if has_list_items:
        score += _LIST_BONUS
    if _SECTION_METRIC_PATTERN.search(text):
        score += _METRIC_BONUS
    return min(100, score)


def _evaluate_structural(html_content: str) -> dict[str, int]:
    soup = BeautifulSoup(html_content or "", "html.parser")
    scores: dict[str, int] = {}
    for section_id in SECTION_WEIGHTS:
        node = soup.find(id=section_id) or soup.find(attrs={"data-section": section_id})
        if node is None:
            scores[section_id] = 0
            continue
        scores[section_id] = _score_section_text(
            node.get_text(),
            has_list_items=node.find("li") is not None,
        )
    return scores


def _evaluate_markers(html_content: str) -> dict[str, int]:
    content = html_content or ""
    return {
        section_id: _MARKER_SCORE
        if f'id="{section_id}"' in content or f'data-section="{section_id}"' in content
        else 0
        for section_id in SECTION_WEIGHTS
    }


def evaluate_resume_sections(html_content: str, *, structural: bool = True) -> dict[str, int]:
    """Score every known section 0-100.

    Structural mode walks the document tree. Marker mode only checks whether
    the section id appears in the markup and is used where no tree is built.
    Section weights are informational and not folded into the total score.
    """
    if structural:
        return _evaluate_structural(html_content)
    return _evaluate_markers(html_content)
