"""Base collector interface for OpenClaw data sources."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class BaseCollector(ABC):
    """Abstract base class for data collectors.

    Collectors turn one external source (the OpenClaw CLI, the gateway log
    file) into a record the API can serve.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this collector (e.g., 'status', 'cron')."""
        pass

    @abstractmethod
    def collect(self) -> Any:
        """Fetch current data from this source.

        Returns:
            The collector's record, or None when the source is unavailable
            and the collector has no fail-soft default.
        """
        pass


class CollectorError(Exception):
    """Exception raised when a collector fails to collect data."""

    def __init__(self, collector_name: str, message: str, cause: Optional[Exception] = None):
        self.collector_name = collector_name
        self.cause = cause
        super().__init__(f"[{collector_name}] {message}")
