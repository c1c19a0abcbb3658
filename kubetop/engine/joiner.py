"""Merge declared-resource records with observed usage by identity key."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from kubetop.engine.ratio import (
    calculate_ratio,
    calculate_remaining,
    remaining_percentage,
    utilization_ratio,
)
from kubetop.models.core.node_info import NodeAllocationInfo, NodeInfo
from kubetop.models.core.resource_info import PodKey, PodResourceInfo
from kubetop.models.core.usage_info import NodeUsageInfo, PodUsageInfo, UsageTotals
from kubetop.models.report.utilization_info import (
    ContainerReportInfo,
    NodeReportInfo,
    PodReportInfo,
    UtilizationRatio,
)

logger = logging.getLogger(__name__)


def _container_reports(
    declared: PodResourceInfo,
    usage: PodUsageInfo,
) -> list[ContainerReportInfo]:
    reports: list[ContainerReportInfo] = []
    for container in declared.containers:
        sample = usage.containers.get(container.name)
        if sample is None:
            logger.debug(
                "Container %s/%s/%s has no usage sample",
                declared.namespace,
                declared.pod_name,
                container.name,
            )
            ratio = UtilizationRatio()
        else:
            ratio = utilization_ratio(container.resources, sample)
        reports.append(
            ContainerReportInfo(
                name=container.name,
                resources=container.resources,
                usage=sample,
                ratio=ratio,
            )
        )
    return reports


def join_pod_reports(
    resources: Mapping[PodKey, PodResourceInfo],
    usage: Mapping[PodKey, PodUsageInfo],
) -> list[PodReportInfo]:
    """Inner-join pod resources and usage on ``(namespace, pod_name)``.

    Pods without a usage sample are dropped; usage samples without a declared
    record are ignored. Output follows key order.
    """
    reports: list[PodReportInfo] = []
    for key in sorted(resources):
        declared = resources[key]
        observed = usage.get(key)
        if observed is None:
            logger.info("Dropping pod %s/%s: no usage sample", key.namespace, key.pod_name)
            continue
        containers = _container_reports(declared, observed)
        usage_total = declared_usage_total(containers)
        reports.append(
            PodReportInfo(
                namespace=declared.namespace,
                pod_name=declared.pod_name,
                node_name=declared.node_name,
                resources=declared.totals,
                usage=usage_total,
                ratio=utilization_ratio(declared.totals, usage_total),
                containers=containers,
            )
        )
    return reports


def declared_usage_total(containers: Iterable[ContainerReportInfo]) -> UsageTotals:
    """Sum usage over declared containers only.

    Samples of containers the pod totals leave out (init or native sidecar
    containers) are not added, so usage and requests cover the same set.
    """
    total = UsageTotals()
    for container in containers:
        if container.usage is not None:
            total = total + container.usage
    return total


def join_node_reports(
    nodes: Iterable[NodeInfo],
    allocations: Mapping[str, NodeAllocationInfo],
    usage: Mapping[str, NodeUsageInfo],
) -> list[NodeReportInfo]:
    """Build node rows from inventory, pod allocations and live usage.

    A node without a live sample, or whose capacity makes utilization
    undefined, is an anomaly and is dropped rather than shown as zero.
    """
    reports: list[NodeReportInfo] = []
    for node in sorted(nodes, key=lambda item: item.name):
        sample = usage.get(node.name)
        if sample is None:
            logger.info("Dropping node %s: no live metrics", node.name)
            continue

        cpu_utilization = calculate_ratio(sample.usage.cpu_usage, node.cpu_capacity)
        memory_utilization = calculate_ratio(sample.usage.memory_usage, node.memory_capacity)
        if cpu_utilization is None or memory_utilization is None:
            logger.info("Dropping node %s: capacity unavailable", node.name)
            continue

        allocation = allocations.get(node.name) or NodeAllocationInfo(node_name=node.name)
        allocated = allocation.totals
        reports.append(
            NodeReportInfo(
                name=node.name,
                cpu_allocatable=node.cpu_allocatable,
                memory_allocatable=node.memory_allocatable,
                cpu_capacity=node.cpu_capacity,
                memory_capacity=node.memory_capacity,
                allocated=allocated,
                pod_count=allocation.pod_count,
                cpu_remaining=calculate_remaining(node.cpu_allocatable, allocated.cpu_requests),
                memory_remaining=calculate_remaining(
                    node.memory_allocatable, allocated.memory_requests
                ),
                cpu_remaining_pct=remaining_percentage(
                    node.cpu_allocatable, allocated.cpu_requests
                ),
                memory_remaining_pct=remaining_percentage(
                    node.memory_allocatable, allocated.memory_requests
                ),
                usage=sample.usage,
                cpu_utilization_pct=cpu_utilization,
                memory_utilization_pct=memory_utilization,
            )
        )
    return reports
