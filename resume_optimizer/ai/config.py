import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    api_key: str
    model: str
    max_tokens: int
    temperature: float
    timeout_s: float
    retries: int
    enabled: bool


_DEFAULTS = {
    "openai": {"key_env": ("OPENAI_API_KEY",), "model": "gpt-3.5-turbo", "temperature": 0.5, "retries": 2},
    "gemini": {
        "key_env": ("GEMINI_API_KEY", "GOOGLE_AI_API_KEY"),
        "model": "gemini-pro",
        "temperature": 0.4,
        "retries": 2,
    },
    "claude": {"key_env": ("ANTHROPIC_API_KEY",), "model": "claude-3-sonnet-20240229", "temperature": 0.5, "retries": 1},
}

SUPPORTED_PROVIDERS = tuple(_DEFAULTS)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def _env(name: str) -> str:
    return (os.getenv(name) or "").strip()


def _env_number(name: str, default, cast):
    raw = _env(name)
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("provider_config_invalid_number name=%s value=%r", name, raw)
        return default


def load_provider_config(name: str) -> ProviderConfig:
    if name not in _DEFAULTS:
        raise ValueError(f"Unsupported AI provider '{name}'")

    defaults = _DEFAULTS[name]
    prefix = name.upper()
    api_key = next((_env(env) for env in defaults["key_env"] if _env(env)), "")

    enabled_raw = _env(f"{prefix}_ENABLED").lower()
    enabled = enabled_raw not in {"0", "false", "no", "n", "off"}
    if not api_key or _looks_like_placeholder(api_key):
        if enabled:
            logger.warning("%s API key is missing or empty. Disabling %s provider.", name, name)
        enabled = False

    return ProviderConfig(
        name=name,
        api_key=api_key,
        model=_env(f"{prefix}_MODEL") or defaults["model"],
        max_tokens=_env_number(f"{prefix}_MAX_TOKENS", 4096, int),
        temperature=_env_number(f"{prefix}_TEMPERATURE", defaults["temperature"], float),
        timeout_s=_env_number(f"{prefix}_TIMEOUT_S", 30.0, float),
        retries=max(0, _env_number(f"{prefix}_MAX_RETRIES", defaults["retries"], int)),
        enabled=enabled,
    )


def load_provider_configs(order: tuple[str, ...]) -> list[ProviderConfig]:
    configs = []
    for name in dict.fromkeys(order):
        if name not in _DEFAULTS:
            logger.warning("provider_config_unknown_provider name=%s", name)
            continue
        configs.append(load_provider_config(name))
    return configs
