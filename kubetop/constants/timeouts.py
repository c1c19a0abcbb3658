"""Timeout constants for cluster queries.

All timeout values for kubectl requests and the overall report deadline.
"""

from typing import Final

# ============================================================================
# Report deadline (float, in seconds)
# ============================================================================

# Bounds the whole inventory + metrics fetch + aggregate pipeline.
REPORT_TIMEOUT_DEFAULT: Final = 5.0

# ============================================================================
# Process-level command timeouts
# ============================================================================

# Hard ceiling for a single kubectl subprocess, even with a generous deadline.
KUBECTL_COMMAND_TIMEOUT: Final = 45

# Smallest --request-timeout handed to kubectl ("0s" would mean no timeout).
MIN_REQUEST_TIMEOUT_SECONDS: Final = 1

__all__ = [
    "KUBECTL_COMMAND_TIMEOUT",
    "MIN_REQUEST_TIMEOUT_SECONDS",
    "REPORT_TIMEOUT_DEFAULT",
]
