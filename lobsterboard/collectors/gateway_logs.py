"""Gateway log collector.

Tails the first gateway log file found in a fixed list of locations.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .base import BaseCollector
from ..log import log_event

logger = logging.getLogger(__name__)

MAX_LINES = 100
PLACEHOLDER_LINES = ["Log viewer coming soon"]


def default_log_paths(home: Optional[Path] = None) -> List[Path]:
    """Common gateway log locations (Linux, macOS, system-wide)."""
    home = home or Path.home()
    return [
        home / ".config" / "openclaw" / "logs" / "gateway.log",
        home / "Library" / "Logs" / "openclaw" / "gateway.log",
        Path("/var/log/openclaw/gateway.log"),
    ]


def tail_lines(text: str, limit: int = MAX_LINES) -> List[str]:
    """Return the last `limit` non-blank lines of `text`."""
    lines = [line for line in text.splitlines() if line.strip()]
    return lines[-limit:] if limit > 0 else []


class GatewayLogCollector(BaseCollector):
    """Collector for recent gateway log lines."""

    def __init__(self, search_paths: Optional[Sequence[Path]] = None, max_lines: int = MAX_LINES):
        self.search_paths = [Path(p).expanduser() for p in (search_paths or default_log_paths())]
        self.max_lines = max_lines

    @property
    def name(self) -> str:
        return "gateway_logs"

    def collect(self) -> Dict[str, List[str]]:
        for path in self.search_paths:
            if not path.exists():
                continue
            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                log_event(logger, logging.DEBUG, "Unable to read log file", path=str(path), error=str(exc))
                continue
            log_event(logger, logging.DEBUG, "Found log file", path=str(path))
            return {"lines": tail_lines(content, self.max_lines)}
        return {"lines": list(PLACEHOLDER_LINES)}
