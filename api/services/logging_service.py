from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_EXTRA_FIELDS = ("event", "plan_id", "user_id", "risk_level", "issues")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        return json.dumps(payload, default=str)


def setup_api_logger(logging_config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    logger = logging.getLogger("api")
    if logger.handlers:
        return logger

    level_name = str((logging_config or {}).get("level", "INFO")).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger
