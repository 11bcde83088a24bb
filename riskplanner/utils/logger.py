"""Logging helpers for console and file output."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional


def setup_logger(logging_config: Dict[str, Any], level_override: Optional[str] = None) -> logging.Logger:
    """Configure the package logger from config and return it.

    ``level_override`` (e.g. from ``--log-level``) wins over ``logging.level``.
    A file handler is added only when ``logging.file`` is set. Records go to
    stderr so they never mix with a report printed on stdout.
    """
    level_name = str(level_override or logging_config.get("level", "INFO")).upper()
    log_file = logging_config.get("file")

    level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger("riskplanner")
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    logger.addHandler(stream_handler)

    logger.propagate = False

    return logger
