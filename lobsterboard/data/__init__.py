"""Data layer - API record models."""

from .models import (
    AuthMode,
    GatewayState,
    StatusRecord,
    CronJobList,
    CacheEntry,
    RequestContext,
    generate_request_id,
)

__all__ = [
    "AuthMode",
    "GatewayState",
    "StatusRecord",
    "CronJobList",
    "CacheEntry",
    "RequestContext",
    "generate_request_id",
]
