"""Scalar constants.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "kubetop"

# ============================================================================
# Units
# ============================================================================

MEBIBYTE: Final = 1024 * 1024
MILLICORES_PER_CORE: Final = 1000

# ============================================================================
# Display
# ============================================================================

NO_DATA: Final = "-"
BELOW_WATERMARK_STYLE: Final = "red"

# ============================================================================
# Metrics API paths (served by metrics-server)
# ============================================================================

METRICS_API_PREFIX: Final = "/apis/metrics.k8s.io/v1beta1"
NODE_METRICS_PATH: Final = f"{METRICS_API_PREFIX}/nodes"
POD_METRICS_PATH_TEMPLATE: Final = f"{METRICS_API_PREFIX}/namespaces/{{namespace}}/pods"

# ============================================================================
# Table headers
# ============================================================================

POD_HEADERS: Final = (
    "NODE",
    "POD",
    "CPU USAGE/REQUEST",
    "MEM USAGE/REQUEST",
    "CPU USAGE/LIMIT",
    "MEM USAGE/LIMIT",
)
POD_CONTAINER_HEADERS: Final = (
    "NODE",
    "POD",
    "CONTAINER",
    "CPU USAGE/REQUEST",
    "MEM USAGE/REQUEST",
    "CPU USAGE/LIMIT",
    "MEM USAGE/LIMIT",
)
POD_WIDE_HEADERS: Final = (
    "CPU REQUEST(m)",
    "CPU LIMIT(m)",
    "CPU USAGE(m)",
    "MEM REQUEST(MiB)",
    "MEM LIMIT(MiB)",
    "MEM USAGE(MiB)",
)
NODE_HEADERS: Final = (
    "NODE",
    "CPU REQUEST REMAINING",
    "CPU UTILIZATION",
    "MEM REQUEST REMAINING",
    "MEM UTILIZATION",
)
NODE_WIDE_HEADERS: Final = (
    "CPU ALLOCATABLE(m)",
    "CPU ALLOCATED(m)",
    "CPU REMAINING(m)",
    "MEM ALLOCATABLE(MiB)",
    "MEM ALLOCATED(MiB)",
    "MEM REMAINING(MiB)",
)

__all__ = [
    "APP_TITLE",
    "BELOW_WATERMARK_STYLE",
    "MEBIBYTE",
    "METRICS_API_PREFIX",
    "MILLICORES_PER_CORE",
    "NODE_HEADERS",
    "NODE_METRICS_PATH",
    "NODE_WIDE_HEADERS",
    "NO_DATA",
    "POD_CONTAINER_HEADERS",
    "POD_HEADERS",
    "POD_METRICS_PATH_TEMPLATE",
    "POD_WIDE_HEADERS",
]
