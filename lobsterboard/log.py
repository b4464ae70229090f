"""
Centralized Logging

- One event per line: ``[ISO-timestamp] [LEVEL] message {jsonData}``
- Written to the console and appended to a log file beside the server
- Structured fields travel in ``extra={"data": {...}}`` (see ``log_event``)
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

ROOT_LOGGER = "lobsterboard"
DEFAULT_LOG_FILE = Path("server.log")


class EventFormatter(logging.Formatter):
    """Render records as ``[timestamp] [LEVEL] message {data}``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        stamp = timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        line = f"[{stamp}] [{record.levelname}] {record.getMessage()}"
        data = getattr(record, "data", None)
        if data:
            line += " " + json.dumps(data, default=str)
        if record.exc_info and record.exc_info[1]:
            line += " " + json.dumps({"exception": self.formatException(record.exc_info)})
        return line


def log_event(logger: logging.Logger, level: int, message: str, **data: Any) -> None:
    """Log ``message`` with ``data`` attached as the JSON payload."""
    logger.log(level, message, extra={"data": data})


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = DEFAULT_LOG_FILE,
) -> logging.Logger:
    """Configure the ``lobsterboard`` logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.)
        log_file: Append-only log file, or None for console only. A file that
            cannot be opened is reported on stderr and skipped.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)

    # Remove existing handlers
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = EventFormatter()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file is not None:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            print(f"[logging] Unable to open {log_file}: {exc}", file=sys.stderr)
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    return root
