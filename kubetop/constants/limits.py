"""Limit and threshold constants.

All limit values, thresholds, and validation ranges.
"""

from typing import Final

# ============================================================================
# Aggregation limits
# ============================================================================

MAX_WORKERS: Final = 8
MAX_WORKERS_MIN: Final = 1
MAX_WORKERS_MAX: Final = 64

# ============================================================================
# Ranking limits
# ============================================================================

# Rows kept when the top-ranked pod belongs to a high-replica workload.
HIGH_REPLICA_TRUNCATE_LIMIT: Final = 10

# ============================================================================
# Validation limits
# ============================================================================

WATERMARK_MIN: Final = 0.0
WATERMARK_MAX: Final = 100.0

__all__ = [
    "HIGH_REPLICA_TRUNCATE_LIMIT",
    "MAX_WORKERS",
    "MAX_WORKERS_MAX",
    "MAX_WORKERS_MIN",
    "WATERMARK_MAX",
    "WATERMARK_MIN",
]
