"""Structured JSON logging for drupalorg-mcp.

Writes one JSON object per line to stderr.  stdout carries the MCP stdio
protocol and must never receive log output.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from typing import Any, TextIO

_LOGGER_NAME = "drupalorg_mcp"
_HANDLER_MARK = "_drupalorg_mcp_handler"
_setup_lock = threading.Lock()


class _JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if hasattr(record, "tool"):
            entry["tool"] = record.tool
        if hasattr(record, "args_data"):
            entry["args"] = record.args_data
        if hasattr(record, "duration_ms"):
            entry["duration_ms"] = record.duration_ms
        if hasattr(record, "error"):
            entry["error"] = record.error
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = str(record.exc_info[1])
        return json.dumps(entry, default=str)


def setup_logging(level: int | str = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach a JSON handler writing to *stream* (default stderr).

    Safe to call more than once: an existing handler is reused and only the
    level changes.
    """
    logger = logging.getLogger(_LOGGER_NAME)

    with _setup_lock:
        if not any(getattr(h, _HANDLER_MARK, False) for h in logger.handlers):
            handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
            handler.setFormatter(_JsonFormatter())
            setattr(handler, _HANDLER_MARK, True)
            logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False
    return logger
