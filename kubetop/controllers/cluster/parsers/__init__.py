"""Parsers turning raw cluster JSON into models."""

from kubetop.controllers.cluster.parsers.metrics_parser import MetricsParser
from kubetop.controllers.cluster.parsers.node_parser import NodeParser
from kubetop.controllers.cluster.parsers.pod_parser import PodParser

__all__ = ["MetricsParser", "NodeParser", "PodParser"]
