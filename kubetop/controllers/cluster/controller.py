"""Cluster controller for report data operations.

This module orchestrates one report invocation against a Kubernetes cluster:
inventory and metrics are fetched concurrently through kubectl, summed by the
resource aggregator off the event loop, checked against the deadline at the
aggregation barrier, and joined into report records.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, TypeVar

from kubetop.constants.enums import FetchSources, FetchState, ReportScope
from kubetop.constants.limits import MAX_WORKERS
from kubetop.controllers.base import BaseController
from kubetop.controllers.cluster.fetchers import (
    MetricsFetcher,
    NamespaceFetcher,
    NodeFetcher,
    PodFetcher,
)
from kubetop.controllers.cluster.parsers import (
    MetricsParser,
    NodeParser,
    PodParser,
)
from kubetop.engine.aggregator import ResourceAggregator
from kubetop.engine.joiner import join_node_reports, join_pod_reports
from kubetop.errors import (
    InventoryUnavailableError,
    KubectlCommandError,
    KubetopError,
    ReportTimeoutError,
    ScopeNotFoundError,
)
from kubetop.models.core.node_info import NodeAllocationInfo
from kubetop.models.core.resource_info import PodInfo, PodKey, PodResourceInfo
from kubetop.models.core.usage_info import NodeUsageInfo, PodMetricsInfo, PodUsageInfo
from kubetop.models.report.utilization_info import NodeReportInfo, PodReportInfo
from kubetop.utils.deadline import Deadline

logger = logging.getLogger(__name__)

T = TypeVar("T")

NODE_SCOPE_LABEL = "the cluster node list"


@dataclass
class FetchStatus:
    """Status tracking for a single data source fetch operation."""

    source_name: str
    state: FetchState = FetchState.SUCCESS
    error_message: str | None = None


class ClusterController(BaseController):
    """Kubernetes report data operations with concurrent fetching.

    Delegates to specialized fetchers and parsers:
    - NamespaceFetcher: scope validation
    - NodeFetcher / PodFetcher: declared inventory
    - MetricsFetcher: metrics.k8s.io usage snapshot
    """

    SOURCE_INVENTORY = FetchSources.INVENTORY.value
    SOURCE_METRICS = FetchSources.METRICS.value
    SOURCE_AGGREGATION = FetchSources.AGGREGATION.value

    def __init__(self, context: str | None = None, max_workers: int = MAX_WORKERS):
        """Initialize the cluster controller.

        Args:
            context: Optional Kubernetes context name.
            max_workers: Fan-out bound for the resource aggregator.
        """
        super().__init__()
        self.context = context

        # Initialize fetchers
        self._namespace_fetcher = NamespaceFetcher(self._run_kubectl)
        self._node_fetcher = NodeFetcher(self._run_kubectl)
        self._pod_fetcher = PodFetcher(self._run_kubectl)
        self._metrics_fetcher = MetricsFetcher(self._run_kubectl)

        # Initialize parsers
        self._node_parser = NodeParser()
        self._pod_parser = PodParser()
        self._metrics_parser = MetricsParser()

        self._aggregator = ResourceAggregator(max_workers=max_workers)

        # Fetch state tracking
        self._fetch_states: dict[str, FetchStatus] = {}
        self._initialize_fetch_states()

    # ------------------------------------------------------------------
    # kubectl runner
    # ------------------------------------------------------------------

    def _run_kubectl_sync(self, args: tuple[str, ...], timeout: float) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = ["kubectl"]
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(args)
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise KubectlCommandError(stderr, result.returncode)
        return result.stdout

    async def _run_kubectl(self, args: tuple[str, ...], deadline: Deadline) -> str:
        """Run kubectl off the event loop, bounded by the report deadline."""
        stage = f"kubectl {' '.join(args[:2])}"
        deadline.check(stage)
        try:
            return await asyncio.to_thread(
                self._run_kubectl_sync,
                args,
                deadline.command_timeout(),
            )
        except subprocess.TimeoutExpired as exc:
            raise ReportTimeoutError(stage, deadline.timeout_seconds) from exc
        except OSError as exc:
            raise InventoryUnavailableError(f"failed to run kubectl: {exc}") from exc

    # ------------------------------------------------------------------
    # Fetch state
    # ------------------------------------------------------------------

    def _initialize_fetch_states(self) -> None:
        """Initialize fetch states for all data sources."""
        for source in [
            self.SOURCE_INVENTORY,
            self.SOURCE_METRICS,
            self.SOURCE_AGGREGATION,
        ]:
            self._fetch_states[source] = FetchStatus(source_name=source)

    def _update_fetch_state(
        self,
        source: str,
        state: FetchState,
        error_message: str | None = None,
    ) -> None:
        """Update the fetch state for a data source."""
        if source not in self._fetch_states:
            self._fetch_states[source] = FetchStatus(source_name=source)
        self._fetch_states[source].state = state
        self._fetch_states[source].error_message = error_message

    async def _tracked(self, source: str, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` while recording its outcome under ``source``."""
        self._update_fetch_state(source, FetchState.LOADING)
        try:
            result = await awaitable
        except KubetopError as exc:
            self._update_fetch_state(source, FetchState.ERROR, exc.message)
            raise
        self._update_fetch_state(source, FetchState.SUCCESS)
        return result

    def get_failed_sources(self) -> dict[str, str]:
        """Map each data source whose last fetch failed to its error message."""
        return {
            source: status.error_message or ""
            for source, status in self._fetch_states.items()
            if status.state == FetchState.ERROR
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def build_report(
        self,
        scope: ReportScope,
        deadline: Deadline,
        namespace: str | None = None,
    ) -> list[Any]:
        """Dispatch to the pod or node report builder."""
        if scope is ReportScope.POD:
            if not namespace:
                raise ValueError("pod scope requires a namespace")
            return await self.build_pod_report(namespace, deadline)
        return await self.build_node_report(deadline)

    async def build_pod_report(
        self,
        namespace: str,
        deadline: Deadline,
    ) -> list[PodReportInfo]:
        """Collect and join declared resources and usage for one namespace.

        Raises:
            ScopeNotFoundError: If the namespace does not exist.
            EmptyScopeError: If the namespace holds no pods.
            MetricsUnavailableError: If the metrics API cannot be queried.
            ReportTimeoutError: If the deadline expires before the barrier.
        """
        self._start_timer()
        exists = await self._tracked(
            self.SOURCE_INVENTORY,
            self._namespace_fetcher.namespace_exists(namespace, deadline),
        )
        if not exists:
            raise ScopeNotFoundError(namespace)

        pod_items, metric_items = await asyncio.gather(
            self._tracked(
                self.SOURCE_INVENTORY,
                self._pod_fetcher.fetch_pods_raw(deadline, namespace),
            ),
            self._tracked(
                self.SOURCE_METRICS,
                self._metrics_fetcher.fetch_pod_metrics_raw(namespace, deadline),
            ),
        )
        pods = self._pod_parser.parse_pods(pod_items)
        samples = self._metrics_parser.parse_pod_metrics_list(metric_items)

        resources, usage = await self._tracked(
            self.SOURCE_AGGREGATION,
            asyncio.to_thread(
                self._aggregate_pods,
                pods,
                samples,
                f"namespace {namespace!r}",
            ),
        )
        deadline.check("aggregation")

        reports = join_pod_reports(resources, usage)
        logger.info(
            "Pod report for %s: %d pods, %d samples, %d joined in %.0f ms",
            namespace,
            len(resources),
            len(usage),
            len(reports),
            self._elapsed_ms(),
        )
        return reports

    async def build_node_report(self, deadline: Deadline) -> list[NodeReportInfo]:
        """Collect node inventory, pod allocations and node usage.

        Raises:
            EmptyScopeError: If the cluster lists no nodes.
            MetricsUnavailableError: If the metrics API cannot be queried.
            ReportTimeoutError: If the deadline expires before the barrier.
        """
        self._start_timer()
        node_items, pod_items, metric_items = await asyncio.gather(
            self._tracked(self.SOURCE_INVENTORY, self._node_fetcher.fetch_nodes_raw(deadline)),
            self._tracked(self.SOURCE_INVENTORY, self._pod_fetcher.fetch_pods_raw(deadline)),
            self._tracked(
                self.SOURCE_METRICS,
                self._metrics_fetcher.fetch_node_metrics_raw(deadline),
            ),
        )
        nodes = self._node_parser.parse_nodes(node_items)
        self._aggregator.require_entities(nodes, NODE_SCOPE_LABEL)
        pods = self._pod_parser.parse_pods(pod_items)
        samples = self._metrics_parser.parse_node_metrics_list(metric_items)

        allocations, usage = await self._tracked(
            self.SOURCE_AGGREGATION,
            asyncio.to_thread(self._aggregate_nodes, pods, samples),
        )
        deadline.check("aggregation")

        reports = join_node_reports(nodes, allocations, usage)
        logger.info(
            "Node report: %d nodes, %d samples, %d joined in %.0f ms",
            len(nodes),
            len(usage),
            len(reports),
            self._elapsed_ms(),
        )
        return reports

    # ------------------------------------------------------------------
    # Aggregation (runs in a worker thread)
    # ------------------------------------------------------------------

    def _aggregate_pods(
        self,
        pods: list[PodInfo],
        samples: list[PodMetricsInfo],
        scope: str,
    ) -> tuple[dict[PodKey, PodResourceInfo], dict[PodKey, PodUsageInfo]]:
        resources = self._aggregator.aggregate_pod_resources(pods, scope)
        usage = self._aggregator.aggregate_pod_usage(samples)
        return resources, usage

    def _aggregate_nodes(
        self,
        pods: list[PodInfo],
        samples: list[NodeUsageInfo],
    ) -> tuple[dict[str, NodeAllocationInfo], dict[str, NodeUsageInfo]]:
        allocations = self._aggregator.aggregate_node_allocations(pods)
        usage = self._aggregator.aggregate_node_usage(samples)
        return allocations, usage


__all__ = ["ClusterController", "FetchStatus"]
