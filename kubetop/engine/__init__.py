"""Resource aggregation and ranking engine."""

from kubetop.engine.aggregator import KeyedAccumulator, ResourceAggregator
from kubetop.engine.joiner import declared_usage_total, join_node_reports, join_pod_reports
from kubetop.engine.ranker import (
    compare_container_lists,
    is_high_replica_pod,
    rank_nodes,
    rank_pods,
    resolve_node_sort_key,
    resolve_pod_sort_key,
    workload_group,
)
from kubetop.engine.ratio import (
    calculate_ratio,
    calculate_remaining,
    remaining_percentage,
    utilization_ratio,
)

__all__ = [
    "KeyedAccumulator",
    "ResourceAggregator",
    "calculate_ratio",
    "calculate_remaining",
    "compare_container_lists",
    "declared_usage_total",
    "is_high_replica_pod",
    "join_node_reports",
    "join_pod_reports",
    "rank_nodes",
    "rank_pods",
    "remaining_percentage",
    "resolve_node_sort_key",
    "resolve_pod_sort_key",
    "utilization_ratio",
    "workload_group",
]
