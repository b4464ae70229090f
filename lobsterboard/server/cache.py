"""TTL caching of collector results.

Each resource (status, cron) gets one slot. A slot is refreshed only when it
is empty or older than the freshness window; otherwise the stored record is
returned without touching the CLI.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from ..collectors.cron import CronCollector
from ..collectors.gateway_logs import GatewayLogCollector
from ..collectors.openclaw import OpenClawCLI
from ..collectors.status import StatusCollector
from ..data.models import CacheEntry, CronJobList, StatusRecord
from ..log import log_event

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 30

T = TypeVar("T")


class TTLCache(Generic[T]):
    """Single-slot cache with a fixed freshness window.

    The check/fetch/store sequence runs under a lock, so concurrent misses
    share one fetch instead of each invoking the CLI.
    A fetch returning None is not stored: the previous entry stays in place
    and the next call fetches again.
    """

    def __init__(
        self,
        name: str,
        fetch_fn: Callable[[], Optional[T]],
        *,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.name = name
        self.fetch_fn = fetch_fn
        self.ttl_ms = int(ttl_seconds * 1000)
        self.clock = clock
        self._entry: CacheEntry[T] = CacheEntry()
        self._lock = threading.Lock()

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def _is_fresh(self, entry: CacheEntry[T], now_ms: int) -> bool:
        return not entry.is_empty() and entry.age_ms(now_ms) < self.ttl_ms

    def get(self) -> Optional[T]:
        """Return the cached value, refreshing it first if stale or empty."""
        with self._lock:
            now_ms = self._now_ms()
            if self._is_fresh(self._entry, now_ms):
                log_event(logger, logging.DEBUG, f"{self.label} cache hit")
                return self._entry.data

            log_event(logger, logging.DEBUG, f"{self.label} cache miss, fetching...")
            data = self.fetch_fn()
            if data is None:
                return None
            self._entry = CacheEntry(data=data, timestamp=now_ms)
            return data


class DashboardState:
    """Owns the per-resource caches handed to the request router."""

    def __init__(
        self,
        status_fn: Callable[[], Optional[StatusRecord]],
        cron_fn: Callable[[], CronJobList],
        log_collector: Optional[GatewayLogCollector] = None,
        *,
        clock: Callable[[], float] = time.time,
        ttl_seconds: float = CACHE_TTL_SECONDS,
    ):
        self.status_cache: TTLCache[StatusRecord] = TTLCache(
            "status", status_fn, ttl_seconds=ttl_seconds, clock=clock
        )
        self.cron_cache: TTLCache[CronJobList] = TTLCache(
            "cron", cron_fn, ttl_seconds=ttl_seconds, clock=clock
        )
        self.log_collector = log_collector or GatewayLogCollector()

    @classmethod
    def from_cli(
        cls,
        cli: OpenClawCLI,
        log_paths: Optional[Sequence[Path]] = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> "DashboardState":
        return cls(
            StatusCollector(cli).collect,
            CronCollector(cli).collect,
            GatewayLogCollector(log_paths),
            clock=clock,
        )

    def get_status(self) -> Optional[StatusRecord]:
        return self.status_cache.get()

    def get_cron_jobs(self) -> CronJobList:
        return self.cron_cache.get() or CronJobList()

    def get_log_lines(self) -> List[str]:
        return self.log_collector.collect()["lines"]
