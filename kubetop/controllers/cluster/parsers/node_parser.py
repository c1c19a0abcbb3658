"""Node parser for cluster controller - parses node data into structured formats."""

from __future__ import annotations

from typing import Any

from kubetop.models.core.node_info import NodeInfo
from kubetop.utils.resource_parser import parse_cpu, parse_memory


class NodeParser:
    """Parses node data into structured formats."""

    def _get_resource_section(self, status: dict[str, Any], section: str) -> dict[str, Any]:
        """Return a status resource mapping (allocatable or capacity), empty if absent."""
        values = status.get(section)
        return values if isinstance(values, dict) else {}

    def parse_node_info(self, node: dict[str, Any]) -> NodeInfo:
        """Parse a single node into NodeInfo.

        Args:
            node: Raw node dictionary from API

        Returns:
            NodeInfo with allocatable and capacity in millicores / MiB.
        """
        metadata = node.get("metadata", {})
        status = node.get("status", {})

        allocatable = self._get_resource_section(status, "allocatable")
        capacity = self._get_resource_section(status, "capacity")

        return NodeInfo(
            name=metadata.get("name", "Unknown"),
            cpu_allocatable=parse_cpu(allocatable.get("cpu")),
            memory_allocatable=parse_memory(allocatable.get("memory")),
            cpu_capacity=parse_cpu(capacity.get("cpu")),
            memory_capacity=parse_memory(capacity.get("memory")),
        )

    def parse_nodes(self, items: list[dict[str, Any]]) -> list[NodeInfo]:
        """Parse every node item of a list response."""
        return [self.parse_node_info(item) for item in items]
