"""Configuration loading utilities."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

DEFAULT_SETTINGS: Dict[str, Any] = {
    "api": {
        "title": "Leverage Risk Planner API",
        "cors_origins": ["*"],
    },
    "logging": {
        "level": "INFO",
    },
}


def merge_settings(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively layer ``override`` on top of ``base`` without mutating either."""
    merged = deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def load_config(
    path: str | Path,
    defaults: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Load a YAML config file layered over the built-in defaults.

    A missing file yields the defaults. A file whose top level is not a
    mapping raises ``ValueError``.
    """
    base = DEFAULT_SETTINGS if defaults is None else defaults
    config_path = Path(path)
    if not config_path.exists():
        return deepcopy(dict(base))

    with config_path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, Mapping):
        raise ValueError(f"Config file {config_path} must contain a mapping, got {type(loaded).__name__}")
    return merge_settings(base, loaded)
