"""Metrics fetcher for cluster controller - reads the metrics.k8s.io snapshot."""

from __future__ import annotations

import logging
from typing import Any

from kubetop.constants.values import NODE_METRICS_PATH, POD_METRICS_PATH_TEMPLATE
from kubetop.controllers.cluster.fetchers.base_fetcher import KubectlFetcher, PayloadError
from kubetop.errors import KubectlCommandError, MetricsUnavailableError
from kubetop.utils.deadline import Deadline

logger = logging.getLogger(__name__)


class MetricsFetcher(KubectlFetcher):
    """Fetches current usage samples served by metrics-server.

    Any failure is reported as MetricsUnavailableError; it is never turned into
    zero usage.
    """

    async def _fetch_raw(self, path: str, deadline: Deadline) -> list[dict[str, Any]]:
        args = ("get", "--raw", path, deadline.request_timeout_arg())
        try:
            output = await self._run_kubectl(args, deadline)
            return self._decode_items(output, path)
        except (KubectlCommandError, PayloadError) as exc:
            logger.debug("Metrics query %s failed: %s", path, exc)
            raise MetricsUnavailableError(str(exc).strip() or None) from exc

    async def fetch_node_metrics_raw(self, deadline: Deadline) -> list[dict[str, Any]]:
        """Fetch one NodeMetrics item per node."""
        return await self._fetch_raw(NODE_METRICS_PATH, deadline)

    async def fetch_pod_metrics_raw(
        self,
        namespace: str,
        deadline: Deadline,
    ) -> list[dict[str, Any]]:
        """Fetch one PodMetrics item per pod in the namespace."""
        return await self._fetch_raw(
            POD_METRICS_PATH_TEMPLATE.format(namespace=namespace),
            deadline,
        )
