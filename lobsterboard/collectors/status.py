"""Status collector.

Turns the human-readable `openclaw status` report into a `StatusRecord`.
The report has no versioned format, so every pattern the dashboard relies
on lives here and falls back to a default when it stops matching.
"""

from __future__ import annotations

import re
from typing import Optional

from .base import BaseCollector
from .openclaw import OpenClawCLI
from ..data.models import AuthMode, GatewayState, StatusRecord

# "auth token" on the Gateway row is gateway auth, not provider auth, so the
# markers below are matched as written rather than on the word "auth".
OAUTH_MARKERS = ("oauth", "claude-cli")
API_KEY_MARKERS = ("api-key",)
API_KEY_RE = re.compile(r"sk-ant-")
LATEST_VERSION_RE = re.compile(r"npm update ([\d.-]+)")
UPDATE_ROW_RE = re.compile(r"Update\s*│\s*([^│]+)")
SESSIONS_RE = re.compile(r"sessions?\s+(\d+)", re.IGNORECASE)
GATEWAY_RUNNING_MARKER = "running"

UNKNOWN_VERSION = "unknown"


def detect_auth_mode(output: str) -> AuthMode:
    """Classify the provider auth mode.

    Precedence: oauth markers, then api-key markers, then oauth as default.
    """
    if any(marker in output for marker in OAUTH_MARKERS):
        return AuthMode.OAUTH
    if any(marker in output for marker in API_KEY_MARKERS) or API_KEY_RE.search(output):
        return AuthMode.API_KEY
    return AuthMode.OAUTH


def extract_latest_version(output: str) -> Optional[str]:
    match = LATEST_VERSION_RE.search(output)
    return match.group(1) if match else None


def extract_update_info(output: str) -> Optional[str]:
    match = UPDATE_ROW_RE.search(output)
    return match.group(1).strip() if match else None


def extract_sessions(output: str) -> int:
    match = SESSIONS_RE.search(output)
    return int(match.group(1)) if match else 0


def detect_gateway(output: str) -> GatewayState:
    if GATEWAY_RUNNING_MARKER in output:
        return GatewayState.RUNNING
    return GatewayState.UNKNOWN


def parse_status_output(output: str, version: str = UNKNOWN_VERSION) -> StatusRecord:
    """Build a StatusRecord from `status` output and an already-resolved version."""
    return StatusRecord(
        auth_mode=detect_auth_mode(output),
        version=version,
        sessions=extract_sessions(output),
        gateway=detect_gateway(output),
        latest_version=extract_latest_version(output),
        update_info=extract_update_info(output),
    )


class StatusCollector(BaseCollector):
    """Collector for `openclaw status` and `openclaw --version`."""

    def __init__(self, cli: Optional[OpenClawCLI] = None):
        self.cli = cli or OpenClawCLI()

    @property
    def name(self) -> str:
        return "status"

    def collect(self) -> Optional[StatusRecord]:
        """Return the current status, or None if `status` itself failed.

        A failed `--version` call only downgrades the version to "unknown".
        """
        output = self.cli.run("status")
        if not output:
            return None
        version_output = self.cli.run("--version")
        version = (version_output or "").strip() or UNKNOWN_VERSION
        return parse_status_output(output, version)
