"""All enum definitions.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Report Enums
# =============================================================================


class ReportScope(Enum):
    """Boundary of a single report invocation."""

    POD = "pod"
    NODE = "node"


class PodSortKey(Enum):
    """Ranking fields for pod-scope reports (usage ratios)."""

    CPU_REQUEST = "cpu.request"
    MEM_REQUEST = "mem.request"
    CPU_LIMIT = "cpu.limit"
    MEM_LIMIT = "mem.limit"


class NodeSortKey(Enum):
    """Ranking fields for node-scope reports."""

    CPU_REQUEST = "cpu.request"
    CPU_UTIL = "cpu.util"
    MEM_REQUEST = "mem.request"
    MEM_UTIL = "mem.util"


class SortDirection(Enum):
    """Sort direction for ranked results."""

    ASC = "asc"
    DESC = "desc"


# =============================================================================
# Fetch State Enums
# =============================================================================


class FetchState(Enum):
    """Data fetch state values."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class FetchSources(Enum):
    """Data source identifiers."""

    INVENTORY = "inventory"
    METRICS = "metrics"
    AGGREGATION = "aggregation"


__all__ = [
    "FetchSources",
    "FetchState",
    "NodeSortKey",
    "PodSortKey",
    "ReportScope",
    "SortDirection",
]
