"""Default values for settings.

All default values used in the ReportSettings model and the CLI.
"""

from typing import Final

# ============================================================================
# Report defaults
# ============================================================================

WATERMARK_DEFAULT: Final = 20.0
NAMESPACE_DEFAULT: Final = "default"
POD_SORT_KEY_DEFAULT: Final = "cpu.request"
NODE_SORT_KEY_DEFAULT: Final = "cpu.request"
GROUP_BY_WORKLOAD_DEFAULT: Final = True

# Name fragments of daemon-style workloads that run one pod per node.
HIGH_REPLICA_NAME_FRAGMENTS_DEFAULT: Final = (
    "calico-node",
    "kube-proxy",
    "nginx-proxy",
)

# ============================================================================
# Config / logging defaults
# ============================================================================

CONFIG_PATH_DEFAULT: Final = "~/.config/kubetop/config.yaml"
CONFIG_PATH_ENV: Final = "KUBETOP_CONFIG"
LOG_LEVEL_ENV: Final = "KUBETOP_LOG_LEVEL"
LOG_LEVEL_DEFAULT: Final = "WARNING"

__all__ = [
    "CONFIG_PATH_DEFAULT",
    "CONFIG_PATH_ENV",
    "GROUP_BY_WORKLOAD_DEFAULT",
    "HIGH_REPLICA_NAME_FRAGMENTS_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "LOG_LEVEL_ENV",
    "NAMESPACE_DEFAULT",
    "NODE_SORT_KEY_DEFAULT",
    "POD_SORT_KEY_DEFAULT",
    "WATERMARK_DEFAULT",
]
