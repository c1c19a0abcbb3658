"""Pod parser for cluster controller - parses pod specs into declared resources."""

from __future__ import annotations

from typing import Any

from kubetop.models.core.resource_info import (
    ContainerResourceInfo,
    PodInfo,
    ResourceTotals,
)
from kubetop.utils.resource_parser import parse_cpu_from_dict, parse_memory_from_dict


class PodParser:
    """Parses pod data into structured formats."""

    @staticmethod
    def parse_container_resources(container: dict[str, Any]) -> ContainerResourceInfo:
        """Extract container requests/limits in millicores and MiB.

        A dimension the container does not declare contributes zero.
        """
        resources = container.get("resources") or {}
        return ContainerResourceInfo(
            name=str(container.get("name", "") or ""),
            resources=ResourceTotals(
                cpu_requests=parse_cpu_from_dict(resources, "requests"),
                cpu_limits=parse_cpu_from_dict(resources, "limits"),
                memory_requests=parse_memory_from_dict(resources, "requests"),
                memory_limits=parse_memory_from_dict(resources, "limits"),
            ),
        )

    def parse_pod_info(self, pod: dict[str, Any]) -> PodInfo:
        """Parse a single pod into PodInfo.

        Init containers are parsed and kept on the record, but nothing
        downstream adds them to pod or node totals.
        """
        metadata = pod.get("metadata", {})
        spec = pod.get("spec", {})
        status = pod.get("status", {})

        return PodInfo(
            namespace=str(metadata.get("namespace", "") or ""),
            name=str(metadata.get("name", "") or ""),
            node_name=str(spec.get("nodeName", "") or ""),
            phase=str(status.get("phase", "Unknown") or "Unknown"),
            containers=[
                self.parse_container_resources(container)
                for container in spec.get("containers", [])
            ],
            init_containers=[
                self.parse_container_resources(container)
                for container in spec.get("initContainers", [])
            ],
        )

    def parse_pods(self, items: list[dict[str, Any]]) -> list[PodInfo]:
        """Parse every pod item of a list response."""
        return [self.parse_pod_info(item) for item in items]
