"""Constants module for kubetop.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (units, headers, API paths)
- timeouts.py: Timeout values (seconds)
- limits.py: Limit values (max/min)
- defaults.py: Default values for settings
"""

from kubetop.constants.defaults import (
    HIGH_REPLICA_NAME_FRAGMENTS_DEFAULT,
    NAMESPACE_DEFAULT,
    NODE_SORT_KEY_DEFAULT,
    POD_SORT_KEY_DEFAULT,
    WATERMARK_DEFAULT,
)
from kubetop.constants.enums import (
    FetchSources,
    FetchState,
    NodeSortKey,
    PodSortKey,
    ReportScope,
    SortDirection,
)
from kubetop.constants.limits import (
    HIGH_REPLICA_TRUNCATE_LIMIT,
    MAX_WORKERS,
)
from kubetop.constants.timeouts import (
    KUBECTL_COMMAND_TIMEOUT,
    REPORT_TIMEOUT_DEFAULT,
)
from kubetop.constants.values import (
    APP_TITLE,
    MEBIBYTE,
    NO_DATA,
)

__all__ = [
    # Application
    "APP_TITLE",
    # Enums
    "FetchSources",
    "FetchState",
    # Defaults
    "HIGH_REPLICA_NAME_FRAGMENTS_DEFAULT",
    # Limits
    "HIGH_REPLICA_TRUNCATE_LIMIT",
    # Timeouts
    "KUBECTL_COMMAND_TIMEOUT",
    "MAX_WORKERS",
    # Units
    "MEBIBYTE",
    "NAMESPACE_DEFAULT",
    "NODE_SORT_KEY_DEFAULT",
    "NO_DATA",
    "NodeSortKey",
    "POD_SORT_KEY_DEFAULT",
    "PodSortKey",
    "REPORT_TIMEOUT_DEFAULT",
    "ReportScope",
    "SortDirection",
    "WATERMARK_DEFAULT",
]
