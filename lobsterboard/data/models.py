"""Data models for OpenClaw dashboard payloads.

This module defines the structures served by the API, following these
principles:

1. WHOLESALE REPLACEMENT
   - Records are frozen; a refresh builds a new record rather than
     mutating the cached one

2. STABLE WIRE SCHEMA
   - Python attributes are snake_case, serialised keys are camelCase
     to match what the dashboard widgets read
   - Optional fields are omitted from the payload when not detected

3. NORMALIZED STATUS VALUES
   - Auth mode: oauth, api-key, unknown
   - Gateway: running, unknown
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar


T = TypeVar("T")


# =============================================================================
# Status Enumerations
# =============================================================================


class AuthMode(str, Enum):
    """How the CLI authenticates against the model provider."""

    OAUTH = "oauth"  # Subscription login (oauth / claude-cli)
    API_KEY = "api-key"  # Raw provider API key
    UNKNOWN = "unknown"


class GatewayState(str, Enum):
    """Whether the local gateway process reports as running."""

    RUNNING = "running"
    UNKNOWN = "unknown"


# =============================================================================
# API Records
# =============================================================================


@dataclass(frozen=True)
class StatusRecord:
    """Parsed result of `openclaw status` plus `openclaw --version`."""

    auth_mode: AuthMode
    version: str
    sessions: int = 0
    gateway: GatewayState = GatewayState.UNKNOWN
    latest_version: Optional[str] = None  # From "npm update <version>" hint
    update_info: Optional[str] = None  # From the "Update │ ... │" table row

    def __post_init__(self):
        if self.sessions < 0:
            raise ValueError(f"sessions must be >= 0, got {self.sessions}")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "authMode": self.auth_mode.value,
            "version": self.version,
            "sessions": self.sessions,
            "gateway": self.gateway.value,
        }
        if self.latest_version is not None:
            data["latestVersion"] = self.latest_version
        if self.update_info is not None:
            data["updateInfo"] = self.update_info
        return data


@dataclass(frozen=True)
class CronJobList:
    """Scheduled jobs as reported by `openclaw cron list --json`.

    Job objects belong to the CLI and are passed through untouched.
    """

    jobs: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"jobs": self.jobs}


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A single cached value and when it was stored.

    Units:
    - timestamp: epoch milliseconds (int); 0 means never stored
    """

    data: Optional[T] = None
    timestamp: int = 0

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.timestamp

    def is_empty(self) -> bool:
        return self.data is None


def generate_request_id() -> str:
    """Return a random 8 hex character token."""
    return secrets.token_hex(4)


@dataclass(frozen=True)
class RequestContext:
    """Per-request correlation data."""

    request_id: str = field(default_factory=generate_request_id)
