from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

from riskplanner.config_loader import load_config

CONFIG_PATH_ENV = "RISKPLANNER_CONFIG"
DEFAULT_CONFIG_PATH = "config/settings.yaml"


class ConfigService:
    def __init__(self, config_path: str | None = None) -> None:
        self.config_path = Path(config_path or os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))

    def load(self) -> Dict[str, Any]:
        """Return settings from the YAML file layered over the built-in defaults."""
        return load_config(self.config_path)
