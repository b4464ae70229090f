"""Data collectors - OpenClaw CLI status, cron jobs, and gateway logs."""

from .base import BaseCollector, CollectorError
from .openclaw import OpenClawCLI
from .status import StatusCollector, parse_status_output
from .cron import CronCollector, parse_cron_output
from .gateway_logs import GatewayLogCollector, default_log_paths

__all__ = [
    "BaseCollector",
    "CollectorError",
    "OpenClawCLI",
    "StatusCollector",
    "parse_status_output",
    "CronCollector",
    "parse_cron_output",
    "GatewayLogCollector",
    "default_log_paths",
]
