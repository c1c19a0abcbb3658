"""Exception hierarchy for report failures.

Every fatal condition of a report invocation is a ``KubetopError`` subclass
with a human-readable message and a distinct process exit code. None of them
is retried.
"""

from __future__ import annotations


class KubetopError(Exception):
    """Base exception for fatal report errors."""

    exit_code: int = 1
    default_message: str = "kubetop failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidSortKeyError(KubetopError):
    """Raised when an unsupported ranking field is requested."""

    exit_code = 2

    def __init__(self, sort_key: str, supported: tuple[str, ...]) -> None:
        self.sort_key = sort_key
        self.supported = supported
        super().__init__(
            f"unknown sort key {sort_key!r}; supported keys: {', '.join(supported)}"
        )


class ScopeNotFoundError(KubetopError):
    """Raised when the requested namespace does not exist."""

    exit_code = 3

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        super().__init__(f"namespace {namespace!r} does not exist")


class EmptyScopeError(KubetopError):
    """Raised when the scope exists but holds zero entities."""

    exit_code = 4

    def __init__(self, scope: str) -> None:
        self.scope = scope
        super().__init__(f"no entities found in {scope}")


class MetricsUnavailableError(KubetopError):
    """Raised when the metrics API is unreachable or not deployed."""

    exit_code = 5

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        message = "metrics unavailable, make sure metrics-server is deployed"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ReportTimeoutError(KubetopError):
    """Raised when the global report deadline expires before aggregation completes."""

    exit_code = 6

    def __init__(self, stage: str, timeout_seconds: float) -> None:
        self.stage = stage
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"report timed out after {timeout_seconds:g}s during {stage}"
        )


class InventoryUnavailableError(KubetopError):
    """Raised when a cluster listing call fails."""

    exit_code = 7
    default_message = "failed to list cluster inventory"


class ConfigError(KubetopError):
    """Base exception for configuration errors."""

    exit_code = 8
    default_message = "invalid configuration"


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class KubectlCommandError(RuntimeError):
    """Raised by the kubectl runner when a command exits non-zero."""

    def __init__(self, stderr: str, returncode: int | None = None) -> None:
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(stderr or "kubectl command failed")


__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "EmptyScopeError",
    "InvalidSortKeyError",
    "InventoryUnavailableError",
    "KubectlCommandError",
    "KubetopError",
    "MetricsUnavailableError",
    "ReportTimeoutError",
    "ScopeNotFoundError",
]
