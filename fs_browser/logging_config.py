from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

# Noisy third-party loggers; the Dash dev server logs every callback POST
QUIET_LOGGERS = ("werkzeug",)

PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv("FS_BROWSER_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
        level: Optional[Union[int, str]] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure the root logger for the dashboard.

    Format: force_format ("json" or "plain"), else FS_BROWSER_LOG_FORMAT, else json.
    Level: level argument (int or name), else FS_BROWSER_LOG_LEVEL, else INFO.

    Selection/projection events log their fields through `extra`, which the JSON
    formatter emits as top-level keys.
    """
    format_mode = (force_format or os.getenv("FS_BROWSER_LOG_FORMAT", "json")).lower()

    handler = logging.StreamHandler()
    if format_mode == "plain":
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    else:
        handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.WARNING))
