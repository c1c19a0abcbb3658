"""Node inventory and allocation models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from kubetop.models.core.resource_info import ResourceTotals


class NodeInfo(BaseModel):
    """A node as listed by the inventory provider (CPU in m, memory in MiB)."""

    name: str
    cpu_allocatable: int = 0
    memory_allocatable: int = 0
    cpu_capacity: int = 0
    memory_capacity: int = 0


class NodeAllocationInfo(BaseModel):
    """Declared resources of every pod scheduled on a node."""

    node_name: str
    totals: ResourceTotals = Field(default_factory=ResourceTotals)
    pod_count: int = 0

    def __add__(self, other: NodeAllocationInfo) -> NodeAllocationInfo:
        return NodeAllocationInfo(
            node_name=self.node_name,
            totals=self.totals + other.totals,
            pod_count=self.pod_count + other.pod_count,
        )
