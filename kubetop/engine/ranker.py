"""Ordering and truncation of merged report records."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from functools import cmp_to_key
from operator import attrgetter
from typing import Any

from kubetop.constants.defaults import HIGH_REPLICA_NAME_FRAGMENTS_DEFAULT
from kubetop.constants.enums import NodeSortKey, PodSortKey, SortDirection
from kubetop.constants.limits import HIGH_REPLICA_TRUNCATE_LIMIT
from kubetop.errors import InvalidSortKeyError
from kubetop.models.core.resource_info import ResourceTotals
from kubetop.models.report.utilization_info import NodeReportInfo, PodReportInfo

logger = logging.getLogger(__name__)

NODE_SORT_DIRECTIONS: dict[NodeSortKey, SortDirection] = {
    NodeSortKey.CPU_REQUEST: SortDirection.ASC,
    NodeSortKey.MEM_REQUEST: SortDirection.ASC,
    NodeSortKey.CPU_UTIL: SortDirection.DESC,
    NodeSortKey.MEM_UTIL: SortDirection.DESC,
}

_POD_RATIO_FIELDS: dict[PodSortKey, str] = {
    PodSortKey.CPU_REQUEST: "cpu_request_pct",
    PodSortKey.MEM_REQUEST: "memory_request_pct",
    PodSortKey.CPU_LIMIT: "cpu_limit_pct",
    PodSortKey.MEM_LIMIT: "memory_limit_pct",
}

_CONTAINER_METRIC_FIELDS: dict[PodSortKey, str] = {
    PodSortKey.CPU_REQUEST: "cpu_requests",
    PodSortKey.MEM_REQUEST: "memory_requests",
    PodSortKey.CPU_LIMIT: "cpu_limits",
    PodSortKey.MEM_LIMIT: "memory_limits",
}

_NODE_FIELDS: dict[NodeSortKey, str] = {
    NodeSortKey.CPU_REQUEST: "cpu_remaining_pct",
    NodeSortKey.MEM_REQUEST: "memory_remaining_pct",
    NodeSortKey.CPU_UTIL: "cpu_utilization_pct",
    NodeSortKey.MEM_UTIL: "memory_utilization_pct",
}


def resolve_pod_sort_key(value: str | PodSortKey) -> PodSortKey:
    """Map user input to a pod sort key.

    Raises:
        InvalidSortKeyError: For any value outside the pod enumeration.
    """
    if isinstance(value, PodSortKey):
        return value
    try:
        return PodSortKey(value)
    except ValueError:
        raise InvalidSortKeyError(
            str(value), tuple(key.value for key in PodSortKey)
        ) from None


def resolve_node_sort_key(value: str | NodeSortKey) -> NodeSortKey:
    """Map user input to a node sort key.

    Raises:
        InvalidSortKeyError: For any value outside the node enumeration.
    """
    if isinstance(value, NodeSortKey):
        return value
    try:
        return NodeSortKey(value)
    except ValueError:
        raise InvalidSortKeyError(
            str(value), tuple(key.value for key in NodeSortKey)
        ) from None


def workload_group(name: str) -> str:
    """Group name from the first two dash-delimited tokens of ``name``."""
    return "-".join(name.split("-")[:2])


def compare_container_lists(
    left: Sequence[ResourceTotals],
    right: Sequence[ResourceTotals],
    metric: Callable[[ResourceTotals], int],
) -> int:
    """Three-way compare two container lists element by element.

    The first differing metric decides; on a tie over the common prefix the
    shorter list sorts first.
    """
    for left_item, right_item in zip(left, right):
        left_value = metric(left_item)
        right_value = metric(right_item)
        if left_value != right_value:
            return -1 if left_value < right_value else 1
    if len(left) == len(right):
        return 0
    return -1 if len(left) < len(right) else 1


def is_high_replica_pod(name: str, fragments: Iterable[str]) -> bool:
    return any(fragment and fragment in name for fragment in fragments)


def _absent_first(value: float | None) -> tuple[int, float]:
    return (0, 0.0) if value is None else (1, value)


def _absent_last_descending(value: float | None) -> tuple[int, float]:
    return (1, 0.0) if value is None else (0, -value)


def _compare_groups(left: str, right: str) -> int:
    if left == right:
        return 0
    return -1 if left < right else 1


def rank_pods(
    reports: Iterable[PodReportInfo],
    sort_key: str | PodSortKey,
    *,
    group_by_workload: bool = True,
    by_container: bool = False,
    high_replica_fragments: Iterable[str] = HIGH_REPLICA_NAME_FRAGMENTS_DEFAULT,
    truncate_limit: int = HIGH_REPLICA_TRUNCATE_LIMIT,
) -> list[PodReportInfo]:
    """Order pod records and apply the high-replica truncation rule.

    Records are first put in identity order so the result never depends on
    the order the aggregator filled its maps. With grouping, pods sharing a
    workload group stay adjacent (groups in name order). Inside a group the
    order is the selected ratio ascending, or, in container mode, the
    element-wise comparison of container declared quantities.

    Only the top-ranked pod's name is checked against the high-replica
    fragments; a match truncates the result to ``truncate_limit`` rows.
    """
    key = resolve_pod_sort_key(sort_key)
    ratio_field = _POD_RATIO_FIELDS[key]
    container_metric = attrgetter(_CONTAINER_METRIC_FIELDS[key])

    def _group(report: PodReportInfo) -> str:
        return workload_group(report.pod_name) if group_by_workload else ""

    def _compare_by_container(left: PodReportInfo, right: PodReportInfo) -> int:
        return _compare_groups(_group(left), _group(right)) or compare_container_lists(
            [container.resources for container in left.containers],
            [container.resources for container in right.containers],
            container_metric,
        )

    def _order(report: PodReportInfo) -> tuple[Any, ...]:
        return (_group(report), _absent_first(getattr(report.ratio, ratio_field)))

    ranked = sorted(reports, key=lambda report: report.key)
    if by_container:
        ranked.sort(key=cmp_to_key(_compare_by_container))
    else:
        ranked.sort(key=_order)

    if (
        ranked
        and len(ranked) > truncate_limit
        and is_high_replica_pod(ranked[0].pod_name, high_replica_fragments)
    ):
        logger.info(
            "Top pod %s looks like a high-replica workload; keeping %d of %d rows",
            ranked[0].pod_name,
            truncate_limit,
            len(ranked),
        )
        ranked = ranked[:truncate_limit]
    return ranked


def rank_nodes(
    reports: Iterable[NodeReportInfo],
    sort_key: str | NodeSortKey,
) -> list[NodeReportInfo]:
    """Order node records.

    Request keys sort by remaining percentage ascending (least headroom
    first); utilization keys sort by live utilization descending.
    """
    key = resolve_node_sort_key(sort_key)
    field = _NODE_FIELDS[key]
    if NODE_SORT_DIRECTIONS[key] is SortDirection.ASC:
        order = _absent_first
    else:
        order = _absent_last_descending

    ranked = sorted(reports, key=lambda report: report.name)
    ranked.sort(key=lambda report: order(getattr(report, field)))
    return ranked
