"""Merged report records carrying derived utilization ratios.

Ratios are percentages; ``None`` is the "no data" sentinel used whenever the
denominator is zero or absent.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from kubetop.models.core.resource_info import PodKey, ResourceTotals
from kubetop.models.core.usage_info import UsageTotals


class UtilizationRatio(BaseModel):
    """Usage as a percentage of requests and of limits, per dimension."""

    cpu_request_pct: float | None = None
    cpu_limit_pct: float | None = None
    memory_request_pct: float | None = None
    memory_limit_pct: float | None = None


class ContainerReportInfo(BaseModel):
    """One container row: declared resources, observed usage and ratios."""

    name: str
    resources: ResourceTotals = Field(default_factory=ResourceTotals)
    usage: UsageTotals | None = None
    ratio: UtilizationRatio = Field(default_factory=UtilizationRatio)


class PodReportInfo(BaseModel):
    """A pod whose declared resources were joined with its usage sample."""

    namespace: str
    pod_name: str
    node_name: str = ""
    resources: ResourceTotals = Field(default_factory=ResourceTotals)
    usage: UsageTotals = Field(default_factory=UsageTotals)
    ratio: UtilizationRatio = Field(default_factory=UtilizationRatio)
    containers: list[ContainerReportInfo] = Field(default_factory=list)

    @property
    def key(self) -> PodKey:
        return PodKey(self.namespace, self.pod_name)


class NodeReportInfo(BaseModel):
    """A node with allocation headroom and live utilization."""

    name: str
    cpu_allocatable: int = 0
    memory_allocatable: int = 0
    cpu_capacity: int = 0
    memory_capacity: int = 0
    allocated: ResourceTotals = Field(default_factory=ResourceTotals)
    pod_count: int = 0
    cpu_remaining: int = 0
    memory_remaining: int = 0
    cpu_remaining_pct: float | None = None
    memory_remaining_pct: float | None = None
    usage: UsageTotals = Field(default_factory=UsageTotals)
    cpu_utilization_pct: float
    memory_utilization_pct: float
