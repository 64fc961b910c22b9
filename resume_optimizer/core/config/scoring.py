from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

_SCORING_CONFIG_PATH = Path(__file__).resolve().parent / "scoring.yaml"
_REQUIRED_SECTIONS = ("suggestions", "keywords", "impact_levels", "diminishing_returns", "sections", "fallback")

_scoring_config: dict[str, Any] | None = None


def _load(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise RuntimeError(f"Scoring tables missing: '{path}' is not packaged.") from exc
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring tables '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring tables '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring tables '{path}': expected a top-level mapping.")

    missing = [name for name in _REQUIRED_SECTIONS if not isinstance(parsed.get(name), dict)]
    if missing:
        raise RuntimeError(f"Invalid scoring tables '{path}': missing section(s) {', '.join(missing)}.")
    return parsed


def get_scoring_config() -> dict[str, Any]:
    """Return the scoring tables, read from the packaged scoring.yaml on first use."""
    global _scoring_config
    if _scoring_config is None:
        _scoring_config = _load(_SCORING_CONFIG_PATH)
    return _scoring_config


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Look up a nested table value by dotted path, e.g. 'keywords.category_weights.technical'."""
    if not path:
        return default

    node: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node
