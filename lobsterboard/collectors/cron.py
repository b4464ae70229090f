"""Cron job collector.

Reads `openclaw cron list --json`. Any failure degrades to an empty job
list, which is always a servable result.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from .base import BaseCollector
from .openclaw import OpenClawCLI
from ..data.models import CronJobList
from ..log import log_event

logger = logging.getLogger(__name__)

CRON_LIST_ARGS = "cron list --json"


def parse_cron_output(output: Optional[str]) -> CronJobList:
    """Parse the CLI's `{"jobs": [...]}` document.

    Jobs are passed through as-is. Missing output, malformed JSON, or a
    document without a `jobs` list all yield an empty list.
    """
    if not output:
        return CronJobList()
    try:
        parsed = json.loads(output)
    except (ValueError, RecursionError) as exc:
        log_event(logger, logging.ERROR, "Failed to parse cron jobs", error=str(exc))
        return CronJobList()

    jobs = parsed.get("jobs") if isinstance(parsed, dict) else None
    if not isinstance(jobs, list):
        log_event(logger, logging.DEBUG, "Cron output has no jobs list", type=type(jobs).__name__)
        return CronJobList()
    return CronJobList(jobs=jobs)


class CronCollector(BaseCollector):
    """Collector for the scheduled job list."""

    def __init__(self, cli: Optional[OpenClawCLI] = None):
        self.cli = cli or OpenClawCLI()

    @property
    def name(self) -> str:
        return "cron"

    def collect(self) -> CronJobList:
        return parse_cron_output(self.cli.run(CRON_LIST_ARGS))
