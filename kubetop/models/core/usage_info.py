"""Observed usage models built from a metrics snapshot."""

from __future__ import annotations

from pydantic import BaseModel, Field

from kubetop.models.core.resource_info import PodKey


class UsageTotals(BaseModel):
    """Observed usage (CPU in millicores, memory in MiB)."""

    cpu_usage: int = 0
    memory_usage: int = 0

    def __add__(self, other: UsageTotals) -> UsageTotals:
        return UsageTotals(
            cpu_usage=self.cpu_usage + other.cpu_usage,
            memory_usage=self.memory_usage + other.memory_usage,
        )


class ContainerUsageInfo(BaseModel):
    """Usage sample of one container."""

    name: str
    usage: UsageTotals = Field(default_factory=UsageTotals)


class PodMetricsInfo(BaseModel):
    """One pod sample as returned by the metrics provider."""

    namespace: str
    name: str
    containers: list[ContainerUsageInfo] = Field(default_factory=list)

    @property
    def key(self) -> PodKey:
        return PodKey(self.namespace, self.name)


class PodUsageInfo(BaseModel):
    """Observed usage of a pod, summed over its container samples."""

    namespace: str
    pod_name: str
    containers: dict[str, UsageTotals] = Field(default_factory=dict)
    totals: UsageTotals = Field(default_factory=UsageTotals)

    @property
    def key(self) -> PodKey:
        return PodKey(self.namespace, self.pod_name)


class NodeUsageInfo(BaseModel):
    """Observed usage of a node."""

    name: str
    usage: UsageTotals = Field(default_factory=UsageTotals)
