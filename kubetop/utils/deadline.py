"""Explicit deadline token for one report invocation.

The deadline is created once at the request boundary and passed into every
collector call; the controller checks it again at the aggregation barrier.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable

from kubetop.constants.timeouts import (
    KUBECTL_COMMAND_TIMEOUT,
    MIN_REQUEST_TIMEOUT_SECONDS,
)
from kubetop.errors import ReportTimeoutError


class Deadline:
    """Wall-clock budget shared by every stage of a report."""

    __slots__ = ("_clock", "_expires_at", "timeout_seconds")

    def __init__(
        self,
        timeout_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError(f"timeout must be positive, got {timeout_seconds}")
        self.timeout_seconds = float(timeout_seconds)
        self._clock = clock
        self._expires_at = clock() + self.timeout_seconds

    def remaining(self) -> float:
        """Seconds left before expiry (never negative)."""
        return max(self._expires_at - self._clock(), 0.0)

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0

    def check(self, stage: str) -> None:
        """Raise ReportTimeoutError if the deadline has passed."""
        if self.expired:
            raise ReportTimeoutError(stage, self.timeout_seconds)

    def command_timeout(self) -> float:
        """Subprocess timeout for the next kubectl call."""
        return min(self.remaining(), float(KUBECTL_COMMAND_TIMEOUT))

    def request_timeout_arg(self) -> str:
        """Render the remaining budget as a kubectl ``--request-timeout`` flag."""
        seconds = max(math.ceil(self.command_timeout()), MIN_REQUEST_TIMEOUT_SECONDS)
        return f"--request-timeout={seconds}s"
