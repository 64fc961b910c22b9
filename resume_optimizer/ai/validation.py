"""Turn raw provider replies into a canonical :class:`OptimizationResult`.

Parsing is layered: the whole reply as JSON, then the first balanced
``{...}`` block inside it, then (only when long enough) the raw reply as
unstructured optimized text with no suggestions or keywords.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Mapping

from resume_optimizer.ai.errors import InvalidResponse
from resume_optimizer.schemas.resume import OptimizationResult
from resume_optimizer.scoring.impact import round_half_up
from resume_optimizer.scoring.normalize import normalize_suggestions

logger = logging.getLogger(__name__)

DEFAULT_ATS_SCORE = 65
MAX_SUGGESTIONS = 5
MAX_KEYWORDS = 10

_FENCE_RE = re.compile(r"^\s*```(?:json|JSON)?\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    match = _FENCE_RE.match(text or "")
    if match:
        return match.group(1).strip()
    return (text or "").strip()


def extract_json_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` substring, ignoring braces inside strings."""
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for pos in range(start, len(text)):
            ch = text[pos]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start : pos + 1]
        start = text.find("{", start + 1)
    return None


def _loads_object(text: str) -> dict | None:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    return data if isinstance(data, dict) else None


def coerce_ats_score(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return DEFAULT_ATS_SCORE
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return DEFAULT_ATS_SCORE
    if not isinstance(value, (int, float)):
        return DEFAULT_ATS_SCORE
    # Range check before isfinite, which overflows on huge ints.
    if not 0 <= value <= 100 or not math.isfinite(value):
        return DEFAULT_ATS_SCORE
    return int(round_half_up(value))


def _keyword_texts(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    seen: set[str] = set()
    out: list[str] = []
    for item in raw:
        if isinstance(item, Mapping):
            item = item.get("text") or item.get("keyword")
        if not isinstance(item, str):
            continue
        text = item.strip()
        if text and text.lower() not in seen:
            seen.add(text.lower())
            out.append(text)
    return out


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


class ResponseValidator:
    def __init__(self, min_chars: int = 100, max_suggestions: int = MAX_SUGGESTIONS, max_keywords: int = MAX_KEYWORDS):
        self.min_chars = min_chars
        self.max_suggestions = max(1, min(MAX_SUGGESTIONS, max_suggestions))
        self.max_keywords = max(1, min(MAX_KEYWORDS, max_keywords))

    def is_viable_text(self, text: str | None) -> bool:
        return bool(text) and len(text.strip()) >= self.min_chars

    def from_mapping(self, data: Mapping[str, Any], *, provider: str) -> OptimizationResult:
        optimized = _first_present(data, "optimizedText", "optimized_text", "optimizedContent", "optimized_content")
        if not isinstance(optimized, str):
            raise InvalidResponse("Response JSON has no optimizedText field", provider=provider)

        suggestions = [
            s for s in normalize_suggestions(_first_present(data, "suggestions")) if s.text
        ][: self.max_suggestions]
        keywords = _keyword_texts(_first_present(data, "keywordSuggestions", "keyword_suggestions", "keywords"))

        result = OptimizationResult(
            optimized_text=optimized.strip(),
            suggestions=suggestions,
            keyword_suggestions=keywords[: self.max_keywords],
            ats_score=coerce_ats_score(_first_present(data, "atsScore", "ats_score", "score")),
            provider_id=provider,
        )
        return self.validate_result(result)

    def parse(self, raw: str | None, *, provider: str) -> OptimizationResult:
        if not raw or not raw.strip():
            raise InvalidResponse("Empty response", provider=provider)

        cleaned = strip_code_fences(raw)
        data = _loads_object(cleaned)
        if data is None:
            block = extract_json_object(cleaned)
            if block is not None:
                data = _loads_object(block)
                if data is not None:
                    logger.info("response_json_extracted provider=%s", provider)

        if data is not None:
            return self.from_mapping(data, provider=provider)

        logger.warning("response_unstructured provider=%s len=%s", provider, len(cleaned))
        return self.validate_result(
            OptimizationResult(
                optimized_text=cleaned,
                suggestions=[],
                keyword_suggestions=[],
                ats_score=DEFAULT_ATS_SCORE,
                provider_id=provider,
            )
        )

    def validate_result(self, result: OptimizationResult) -> OptimizationResult:
        if not self.is_viable_text(result.optimized_text):
            raise InvalidResponse(
                f"Optimized text too short ({len(result.optimized_text.strip())} < {self.min_chars} chars)",
                provider=result.provider_id,
            )
        if len(result.suggestions) > self.max_suggestions or len(result.keyword_suggestions) > self.max_keywords:
            result = result.model_copy(
                update={
                    "suggestions": result.suggestions[: self.max_suggestions],
                    "keyword_suggestions": result.keyword_suggestions[: self.max_keywords],
                }
            )
        return result
