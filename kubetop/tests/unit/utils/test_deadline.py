"""Tests for the report deadline token."""

from __future__ import annotations

import pytest

from kubetop.constants.timeouts import KUBECTL_COMMAND_TIMEOUT
from kubetop.errors import ReportTimeoutError
from kubetop.utils.deadline import Deadline


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


class TestDeadline:
    """Tests for Deadline class."""

    def test_remaining_counts_down(self) -> None:
        clock = FakeClock()
        deadline = Deadline(5.0, clock=clock)
        assert deadline.remaining() == pytest.approx(5.0)

        clock.now += 2.0
        assert deadline.remaining() == pytest.approx(3.0)
        assert not deadline.expired

    def test_remaining_never_negative(self) -> None:
        clock = FakeClock()
        deadline = Deadline(1.0, clock=clock)
        clock.now += 10.0
        assert deadline.remaining() == 0.0
        assert deadline.expired

    def test_check_raises_after_expiry(self) -> None:
        clock = FakeClock()
        deadline = Deadline(1.5, clock=clock)
        deadline.check("fetch")

        clock.now += 2.0
        with pytest.raises(ReportTimeoutError) as exc_info:
            deadline.check("aggregation")
        assert exc_info.value.stage == "aggregation"
        assert exc_info.value.timeout_seconds == 1.5
        assert exc_info.value.exit_code == 6

    def test_command_timeout_is_capped(self) -> None:
        deadline = Deadline(KUBECTL_COMMAND_TIMEOUT * 4, clock=FakeClock())
        assert deadline.command_timeout() == KUBECTL_COMMAND_TIMEOUT

    def test_request_timeout_arg(self) -> None:
        clock = FakeClock()
        deadline = Deadline(5.0, clock=clock)
        assert deadline.request_timeout_arg() == "--request-timeout=5s"

        clock.now += 4.5
        assert deadline.request_timeout_arg() == "--request-timeout=1s"

        clock.now += 10.0
        assert deadline.request_timeout_arg() == "--request-timeout=1s"

    @pytest.mark.parametrize("timeout", [0, -1.0])
    def test_rejects_non_positive_timeout(self, timeout: float) -> None:
        with pytest.raises(ValueError):
            Deadline(timeout)
