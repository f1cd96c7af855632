# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logging for github-me.

Every log line is a single JSON object written to stdout:

  {"ts": "2026-...", "level": "INFO", "module": "github_me.release.pipeline",
   "msg": "Step started", "step": 1, "step_name": "compile"}

The output of cargo and cargo-lambda is never routed through here. Those
processes inherit the terminal, so their diagnostics show up exactly as the
tools print them and our JSON lines sit between them.

All loggers hang off the `github_me` package logger. Handlers live only on
that one logger and children propagate up to it, which means the CLI can
change the level or add a log file once (via `configure_logging`) and every
module-level logger created at import time picks it up.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

PACKAGE_LOGGER_NAME = "github_me"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# Attributes every LogRecord carries. Anything else on the record came in
# through `extra=` and belongs in the JSON output.
_STANDARD_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "relativeCreated",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "pathname",
        "filename",
        "module",
        "levelno",
        "levelname",
        "processName",
        "process",
        "threadName",
        "thread",
        "message",
        "msecs",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Mandatory fields are `ts` (ISO 8601 UTC), `level`, `module` (the logger
    name) and `msg`. Fields passed through `extra=` are merged in, and an
    attached exception is rendered into an `exc` field.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def _package_logger() -> logging.Logger:
    """Return the package logger, attaching the stdout handler on first use."""
    root = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(JsonFormatter())
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False
    return root


def get_logger(name: str, log_level: Optional[str] = None) -> logging.Logger:
    """
    Get a structured JSON logger.

    Every module calls this once at import time with its `__name__`. Names
    outside the `github_me` namespace get nested under it so they share the
    package handlers.

    Args:
        name: Logger name, typically `__name__` of the calling module.
        log_level: Optional level override for this logger only.

    Returns:
        A logging.Logger that emits JSON through the package handlers.
    """
    _package_logger()

    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"

    logger = logging.getLogger(name)
    if log_level is not None:
        logger.setLevel(_resolve_log_level(log_level))
    return logger


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Set the package-wide level and outputs.

    Called once by the CLI after config is loaded. Re-running it replaces the
    handlers instead of stacking them, so tests can call it freely.

    Args:
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional file that receives a copy of every line.
        stream: Where to write; defaults to the current sys.stdout.

    Returns:
        The configured package logger.
    """
    level = _resolve_log_level(log_level)
    root = _package_logger()

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler(stream=stream if stream is not None else sys.stdout)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(level)
    return root
