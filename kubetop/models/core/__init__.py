"""Core inventory, declared-resource and usage models."""

from kubetop.models.core.node_info import NodeAllocationInfo, NodeInfo
from kubetop.models.core.resource_info import (
    ContainerResourceInfo,
    PodInfo,
    PodKey,
    PodResourceInfo,
    ResourceTotals,
)
from kubetop.models.core.usage_info import (
    ContainerUsageInfo,
    NodeUsageInfo,
    PodMetricsInfo,
    PodUsageInfo,
    UsageTotals,
)

__all__ = [
    "ContainerResourceInfo",
    "ContainerUsageInfo",
    "NodeAllocationInfo",
    "NodeInfo",
    "NodeUsageInfo",
    "PodInfo",
    "PodKey",
    "PodMetricsInfo",
    "PodResourceInfo",
    "PodUsageInfo",
    "ResourceTotals",
    "UsageTotals",
]
