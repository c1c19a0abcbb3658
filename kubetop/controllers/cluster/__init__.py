"""Init file for cluster module."""

from kubetop.controllers.cluster.fetchers import (
    MetricsFetcher,
    NamespaceFetcher,
    NodeFetcher,
    PodFetcher,
)
from kubetop.controllers.cluster.parsers import MetricsParser, NodeParser, PodParser

__all__ = [
    "MetricsFetcher",
    "MetricsParser",
    "NamespaceFetcher",
    "NodeFetcher",
    "NodeParser",
    "PodFetcher",
    "PodParser",
]
