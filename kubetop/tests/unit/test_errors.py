"""Tests for the report error hierarchy."""

from __future__ import annotations

import pytest

from kubetop.errors import (
    ConfigLoadError,
    EmptyScopeError,
    InvalidSortKeyError,
    InventoryUnavailableError,
    KubectlCommandError,
    KubetopError,
    MetricsUnavailableError,
    ReportTimeoutError,
    ScopeNotFoundError,
)


class TestKubetopErrors:
    """Tests for error messages and exit codes."""

    @pytest.mark.parametrize(
        "error",
        [
            InvalidSortKeyError("x", ("cpu.request",)),
            ScopeNotFoundError("ghost"),
            EmptyScopeError("namespace shop"),
            MetricsUnavailableError(),
            ReportTimeoutError("metrics", 5.0),
            InventoryUnavailableError(),
            ConfigLoadError(),
        ],
    )
    def test_all_are_kubetop_errors(self, error: KubetopError) -> None:
        assert isinstance(error, KubetopError)
        assert error.exit_code != 0
        assert error.message

    def test_exit_codes_are_distinct(self) -> None:
        codes = [
            InvalidSortKeyError.exit_code,
            ScopeNotFoundError.exit_code,
            EmptyScopeError.exit_code,
            MetricsUnavailableError.exit_code,
            ReportTimeoutError.exit_code,
            InventoryUnavailableError.exit_code,
            ConfigLoadError.exit_code,
        ]
        assert len(set(codes)) == len(codes)

    def test_scope_not_found_message(self) -> None:
        assert ScopeNotFoundError("ghost").message == "namespace 'ghost' does not exist"

    def test_metrics_unavailable_detail(self) -> None:
        error = MetricsUnavailableError("the server could not find the requested resource")
        assert "metrics-server" in error.message
        assert "could not find" in error.message

    def test_timeout_message(self) -> None:
        assert ReportTimeoutError("aggregation", 5.0).message == (
            "report timed out after 5s during aggregation"
        )

    def test_kubectl_command_error_is_not_fatal_type(self) -> None:
        error = KubectlCommandError("boom", 1)
        assert not isinstance(error, KubetopError)
        assert error.returncode == 1
        assert str(error) == "boom"
