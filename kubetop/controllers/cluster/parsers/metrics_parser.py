"""Metrics parser for cluster controller - parses metrics.k8s.io samples."""

from __future__ import annotations

from typing import Any

from kubetop.models.core.usage_info import (
    ContainerUsageInfo,
    NodeUsageInfo,
    PodMetricsInfo,
    UsageTotals,
)
from kubetop.utils.resource_parser import parse_cpu, parse_memory


class MetricsParser:
    """Parses NodeMetrics / PodMetrics items into usage models."""

    @staticmethod
    def parse_usage(usage: Any) -> UsageTotals:
        """Convert a ``usage`` mapping into millicores and MiB."""
        if not isinstance(usage, dict):
            return UsageTotals()
        return UsageTotals(
            cpu_usage=parse_cpu(usage.get("cpu")),
            memory_usage=parse_memory(usage.get("memory")),
        )

    def parse_node_metrics(self, item: dict[str, Any]) -> NodeUsageInfo:
        """Parse one NodeMetrics item."""
        metadata = item.get("metadata", {})
        return NodeUsageInfo(
            name=str(metadata.get("name", "") or ""),
            usage=self.parse_usage(item.get("usage")),
        )

    def parse_pod_metrics(self, item: dict[str, Any]) -> PodMetricsInfo:
        """Parse one PodMetrics item with its per-container samples."""
        metadata = item.get("metadata", {})
        return PodMetricsInfo(
            namespace=str(metadata.get("namespace", "") or ""),
            name=str(metadata.get("name", "") or ""),
            containers=[
                ContainerUsageInfo(
                    name=str(container.get("name", "") or ""),
                    usage=self.parse_usage(container.get("usage")),
                )
                for container in item.get("containers", [])
            ],
        )

    def parse_node_metrics_list(self, items: list[dict[str, Any]]) -> list[NodeUsageInfo]:
        return [self.parse_node_metrics(item) for item in items]

    def parse_pod_metrics_list(self, items: list[dict[str, Any]]) -> list[PodMetricsInfo]:
        return [self.parse_pod_metrics(item) for item in items]
