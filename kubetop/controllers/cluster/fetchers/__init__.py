"""Fetchers wrapping kubectl list and metrics calls."""

from kubetop.controllers.cluster.fetchers.base_fetcher import (
    KubectlFetcher,
    PayloadError,
    RunKubectl,
)
from kubetop.controllers.cluster.fetchers.metrics_fetcher import MetricsFetcher
from kubetop.controllers.cluster.fetchers.namespace_fetcher import NamespaceFetcher
from kubetop.controllers.cluster.fetchers.node_fetcher import NodeFetcher
from kubetop.controllers.cluster.fetchers.pod_fetcher import PodFetcher

__all__ = [
    "KubectlFetcher",
    "MetricsFetcher",
    "NamespaceFetcher",
    "NodeFetcher",
    "PayloadError",
    "PodFetcher",
    "RunKubectl",
]
