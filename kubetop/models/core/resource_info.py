"""Declared resource (requests/limits) models."""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, Field


class PodKey(NamedTuple):
    """Composite identity of a pod, used to join declared and observed data."""

    namespace: str
    pod_name: str


class ResourceTotals(BaseModel):
    """Requests and limits per dimension (CPU in millicores, memory in MiB)."""

    cpu_requests: int = 0
    cpu_limits: int = 0
    memory_requests: int = 0
    memory_limits: int = 0

    def __add__(self, other: ResourceTotals) -> ResourceTotals:
        return ResourceTotals(
            cpu_requests=self.cpu_requests + other.cpu_requests,
            cpu_limits=self.cpu_limits + other.cpu_limits,
            memory_requests=self.memory_requests + other.memory_requests,
            memory_limits=self.memory_limits + other.memory_limits,
        )


class ContainerResourceInfo(BaseModel):
    """Declared resources of one container."""

    name: str
    resources: ResourceTotals = Field(default_factory=ResourceTotals)


class PodInfo(BaseModel):
    """A pod as listed by the inventory provider."""

    namespace: str
    name: str
    node_name: str = ""
    phase: str = "Unknown"
    containers: list[ContainerResourceInfo] = Field(default_factory=list)
    init_containers: list[ContainerResourceInfo] = Field(default_factory=list)

    @property
    def key(self) -> PodKey:
        return PodKey(self.namespace, self.name)


class PodResourceInfo(BaseModel):
    """Declared resources of a pod, summed over its non-init containers.

    Container records are kept alongside the total so container-level rows
    can be produced from the same record.
    """

    namespace: str
    pod_name: str
    node_name: str = ""
    containers: list[ContainerResourceInfo] = Field(default_factory=list)
    totals: ResourceTotals = Field(default_factory=ResourceTotals)

    @property
    def key(self) -> PodKey:
        return PodKey(self.namespace, self.pod_name)
