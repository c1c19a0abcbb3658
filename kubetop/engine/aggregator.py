"""Concurrent aggregation of child quantities into per-parent totals.

One unit of work is submitted per top-level entity. Each unit sums its
children locally and then takes the accumulator lock only for the map write.
Leaving the executor block is the barrier: no caller sees a map until every
unit has finished.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Generic, TypeVar

from kubetop.constants.limits import MAX_WORKERS, MAX_WORKERS_MAX, MAX_WORKERS_MIN
from kubetop.errors import EmptyScopeError
from kubetop.models.core.node_info import NodeAllocationInfo
from kubetop.models.core.resource_info import (
    PodInfo,
    PodKey,
    PodResourceInfo,
    ResourceTotals,
)
from kubetop.models.core.usage_info import (
    NodeUsageInfo,
    PodMetricsInfo,
    PodUsageInfo,
    UsageTotals,
)

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T")

# Pods in these phases hold their requests on the node they are bound to.
ALLOCATING_POD_PHASES = frozenset({"Running", "Pending"})


class KeyedAccumulator(Generic[K, V]):
    """Keyed result map guarded by a single lock."""

    def __init__(self, label: str) -> None:
        self._label = label
        self._lock = threading.Lock()
        self._records: dict[K, V] = {}

    def insert(self, key: K, value: V) -> bool:
        """Insert a record for a key that must be unique in this pass.

        A duplicate key keeps the first record and is logged.
        """
        with self._lock:
            if key in self._records:
                duplicate = True
            else:
                self._records[key] = value
                duplicate = False
        if duplicate:
            logger.warning("Duplicate %s key %s ignored", self._label, key)
        return not duplicate

    def snapshot(self) -> dict[K, V]:
        with self._lock:
            return dict(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class ResourceAggregator:
    """Sums containers into pods and pods into nodes on a bounded thread pool."""

    def __init__(self, max_workers: int = MAX_WORKERS) -> None:
        self.max_workers = max(MAX_WORKERS_MIN, min(int(max_workers), MAX_WORKERS_MAX))

    @staticmethod
    def require_entities(entities: Sequence[object], scope: str) -> None:
        """Short-circuit with EmptyScopeError when a scope holds nothing."""
        if not entities:
            raise EmptyScopeError(scope)

    def _fan_out(self, entities: Sequence[T], unit: Callable[[T], None]) -> None:
        if not entities:
            return
        workers = min(self.max_workers, len(entities))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # Consuming the iterator re-raises the first unit failure.
            list(executor.map(unit, entities))

    # ------------------------------------------------------------------
    # Pod scope
    # ------------------------------------------------------------------

    @staticmethod
    def sum_container_resources(pod: PodInfo) -> ResourceTotals:
        """Declared totals of a pod; init containers are never counted."""
        totals = ResourceTotals()
        for container in pod.containers:
            totals = totals + container.resources
        return totals

    def aggregate_pod_resources(
        self,
        pods: Sequence[PodInfo],
        scope: str,
    ) -> dict[PodKey, PodResourceInfo]:
        """Build the declared-resource map for a pod scope.

        Raises:
            EmptyScopeError: If ``pods`` is empty.
        """
        self.require_entities(pods, scope)
        accumulator: KeyedAccumulator[PodKey, PodResourceInfo] = KeyedAccumulator("pod resource")

        def _unit(pod: PodInfo) -> None:
            record = PodResourceInfo(
                namespace=pod.namespace,
                pod_name=pod.name,
                node_name=pod.node_name,
                containers=list(pod.containers),
                totals=self.sum_container_resources(pod),
            )
            accumulator.insert(record.key, record)

        self._fan_out(pods, _unit)
        logger.debug("Aggregated declared resources for %d pods", len(accumulator))
        return accumulator.snapshot()

    def aggregate_pod_usage(
        self,
        samples: Sequence[PodMetricsInfo],
    ) -> dict[PodKey, PodUsageInfo]:
        """Build the observed-usage map for a pod scope."""
        accumulator: KeyedAccumulator[PodKey, PodUsageInfo] = KeyedAccumulator("pod usage")

        def _unit(sample: PodMetricsInfo) -> None:
            totals = UsageTotals()
            per_container: dict[str, UsageTotals] = {}
            for container in sample.containers:
                totals = totals + container.usage
                previous = per_container.get(container.name)
                per_container[container.name] = (
                    container.usage if previous is None else previous + container.usage
                )
            record = PodUsageInfo(
                namespace=sample.namespace,
                pod_name=sample.name,
                containers=per_container,
                totals=totals,
            )
            accumulator.insert(record.key, record)

        self._fan_out(samples, _unit)
        logger.debug("Aggregated usage samples for %d pods", len(accumulator))
        return accumulator.snapshot()

    # ------------------------------------------------------------------
    # Node scope
    # ------------------------------------------------------------------

    def aggregate_node_allocations(
        self,
        pods: Iterable[PodInfo],
    ) -> dict[str, NodeAllocationInfo]:
        """Sum declared resources of bound, allocating pods per node.

        Units write one contribution per pod; the per-node reduction runs
        after the barrier, in pod key order.
        """
        bound = [
            pod
            for pod in pods
            if pod.node_name and pod.phase in ALLOCATING_POD_PHASES
        ]
        accumulator: KeyedAccumulator[PodKey, NodeAllocationInfo] = KeyedAccumulator(
            "node allocation"
        )

        def _unit(pod: PodInfo) -> None:
            contribution = NodeAllocationInfo(
                node_name=pod.node_name,
                totals=self.sum_container_resources(pod),
                pod_count=1,
            )
            accumulator.insert(pod.key, contribution)

        self._fan_out(bound, _unit)

        allocations: dict[str, NodeAllocationInfo] = {}
        for _, contribution in sorted(accumulator.snapshot().items()):
            existing = allocations.get(contribution.node_name)
            allocations[contribution.node_name] = (
                contribution if existing is None else existing + contribution
            )
        logger.debug(
            "Aggregated allocations of %d pods onto %d nodes",
            len(accumulator),
            len(allocations),
        )
        return allocations

    def aggregate_node_usage(
        self,
        samples: Sequence[NodeUsageInfo],
    ) -> dict[str, NodeUsageInfo]:
        """Index node usage samples by node name."""
        accumulator: KeyedAccumulator[str, NodeUsageInfo] = KeyedAccumulator("node usage")

        def _unit(sample: NodeUsageInfo) -> None:
            accumulator.insert(sample.name, sample)

        self._fan_out(samples, _unit)
        return accumulator.snapshot()
