"""Structured JSON logging for the ``analysis_model`` loggers.

The library never touches the root logger. Applications that want the
diagnostics of the parser runs as JSON lines call :func:`setup_logging`
once, which attaches a handler to the ``analysis_model`` package logger only.

Format per line:
    {"ts": "...", "level": "INFO", "logger": "analysis_model.services.pipeline_service",
     "msg": "Parsed pmd.xml", "origin": "pmd", "source": "/ws/pmd.xml", "issues": 12}
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import TextIO

PACKAGE_LOGGER = "analysis_model"

# Attributes a caller may attach with ``extra={...}``
CONTEXT_FIELDS = ("origin", "source", "issues", "duplicates", "fingerprints", "modules")


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class _JSONHandler(logging.StreamHandler):
    """Marker type so setup_logging() only replaces its own handler."""


def setup_logging(level: str | int | None = None, stream: TextIO | None = None) -> logging.Logger:
    """Opt-in JSON output of the ``analysis_model`` loggers.

    The level defaults to the ``LOG_LEVEL`` env var (``INFO``). Handlers of
    the host application are left alone; calling this again replaces the
    handler installed by the previous call.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handler = _JSONHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())

    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in [h for h in logger.handlers if isinstance(h, _JSONHandler)]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
