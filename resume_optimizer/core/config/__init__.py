from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    optimize_rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]
    ai_provider_order: tuple[str, ...]
    min_optimized_text_chars: int
    retry_initial_delay_s: float
    section_scoring_mode: str


settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    optimize_rate_limit=_get_env("OPTIMIZE_RATE_LIMIT", "10/minute") or "10/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
        ],
    ),
    ai_provider_order=tuple(
        name.lower() for name in _get_env_list("AI_PROVIDER_ORDER", ["openai", "gemini", "claude"])
    ),
    min_optimized_text_chars=_get_env_int("MIN_OPTIMIZED_TEXT_CHARS", 100),
    retry_initial_delay_s=_get_env_float("RETRY_INITIAL_DELAY_S", 1.0),
    section_scoring_mode=(_get_env("SECTION_SCORING_MODE", "structural") or "structural").strip().lower(),
)

if settings.section_scoring_mode not in {"structural", "marker"}:
    raise RuntimeError("SECTION_SCORING_MODE must be either 'structural' or 'marker'.")

__all__ = ["Settings", "settings"]
