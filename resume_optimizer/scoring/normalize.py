"""Boundary normalization for suggestions and keywords.

Providers, stored records and API clients hand us heterogeneous shapes
(``type`` vs ``category``, ``impact`` vs ``impactDescription``, ``applied`` vs
``isApplied``, bare keyword strings). Everything is converted here into the
canonical :class:`Suggestion` / :class:`Keyword` models so the scoring code
never has to look at field-naming variants.

Cached derived fields coming from the outside (``score``, ``pointImpact``,
``impact``, ``category`` on keywords) are dropped; the scoring engine
recomputes them from the canonical inputs.
"""

from __future__ import annotations

import hashlib
from typing import Any, Mapping

from resume_optimizer.schemas.resume import Keyword, Suggestion

SUGGESTION_CATEGORIES = (
    "structure",
    "content",
    "skills",
    "formatting",
    "language",
    "keywords",
    "ats-direct",
)

_CATEGORY_ALIASES = {
    "ats": "ats-direct",
    "ats-direct": "ats-direct",
    "keyword": "keywords",
    "skill": "skills",
    "format": "formatting",
    "layout": "structure",
}


def _short_hash(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:12]


def _first(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return default


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(value)


def normalize_category(raw: Any) -> str:
    value = _as_text(raw).lower().replace("_", "-").replace(" ", "-")
    if not value:
        return "general"
    return _CATEGORY_ALIASES.get(value, value)


def suggestion_id(category: str, text: str) -> str:
    return f"sug-{_short_hash(f'{category}|{text}')}"


def keyword_id(text: str) -> str:
    return f"kw-{_short_hash(text.lower())}"


def normalize_suggestion(raw: Suggestion | Mapping[str, Any]) -> Suggestion:
    if isinstance(raw, Suggestion):
        category = normalize_category(raw.category)
        return raw.model_copy(
            update={
                "category": category,
                "id": raw.id or suggestion_id(category, raw.text),
                "impact_score": None,
                "point_impact": None,
            }
        )

    category = normalize_category(_first(raw, "category", "type"))
    text = _as_text(_first(raw, "text", "suggestion", default=""))
    description = _first(raw, "impact_description", "impactDescription", "impact", default="")
    # Some stored rows carry a numeric impact in the description slot.
    if not isinstance(description, str):
        description = ""
    section = _first(raw, "section", "target_section", "targetSection")

    return Suggestion(
        id=_as_text(_first(raw, "id", default="")) or suggestion_id(category, text),
        category=category,
        text=text,
        impact_description=description.strip(),
        is_applied=_as_bool(_first(raw, "is_applied", "isApplied", "applied", default=False)),
        section=_as_text(section) or None,
    )


def normalize_keyword(raw: Keyword | Mapping[str, Any] | str) -> Keyword:
    if isinstance(raw, Keyword):
        return raw.model_copy(
            update={
                "id": raw.id or keyword_id(raw.text),
                "category": None,
                "impact": None,
                "point_impact": None,
            }
        )

    if isinstance(raw, str):
        text = raw.strip()
        return Keyword(id=keyword_id(text), text=text)

    text = _as_text(_first(raw, "text", "keyword", "term", default=""))
    return Keyword(
        id=_as_text(_first(raw, "id", default="")) or keyword_id(text),
        text=text,
        is_applied=_as_bool(_first(raw, "is_applied", "isApplied", "applied", default=False)),
    )


def normalize_suggestions(items: list[Any] | None) -> list[Suggestion]:
    return [normalize_suggestion(item) for item in (items or []) if isinstance(item, (Suggestion, Mapping))]


def normalize_keywords(items: list[Any] | None) -> list[Keyword]:
    normalized = [
        normalize_keyword(item) for item in (items or []) if isinstance(item, (Keyword, Mapping, str))
    ]
    return [keyword for keyword in normalized if keyword.text]
