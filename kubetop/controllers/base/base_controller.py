"""Base controller for report data operations.

Controllers own the I/O against a data source and hand fully aggregated
records to the ranking stage.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from kubetop.constants.enums import ReportScope
from kubetop.utils.deadline import Deadline

logger = logging.getLogger(__name__)


class TimedControllerMixin:
    """Mixin measuring how long a report build took."""

    def __init__(self) -> None:
        """Initialize the timing mixin."""
        self._load_start_time: float | None = None

    def _start_timer(self) -> None:
        self._load_start_time = time.monotonic()

    def _elapsed_ms(self) -> float:
        if self._load_start_time is None:
            return 0.0
        return (time.monotonic() - self._load_start_time) * 1000


class BaseController(TimedControllerMixin, ABC):
    """Base controller class.

    Subclasses implement the abstract methods to provide a specific data
    source.
    """

    def get_failed_sources(self) -> dict[str, str]:
        """Map data sources whose last fetch failed to their error message."""
        return {}

    @abstractmethod
    async def build_report(
        self,
        scope: ReportScope,
        deadline: Deadline,
        namespace: str | None = None,
    ) -> list[Any]:
        """Collect, aggregate and join the records of one scope.

        Returns:
            Unranked report records
        """
        ...
