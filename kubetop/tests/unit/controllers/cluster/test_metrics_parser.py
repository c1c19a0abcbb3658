"""Tests for metrics parser."""

from __future__ import annotations

import pytest

from kubetop.controllers.cluster.parsers.metrics_parser import MetricsParser


class TestMetricsParser:
    """Tests for MetricsParser class."""

    @pytest.fixture
    def parser(self) -> MetricsParser:
        """Create MetricsParser instance."""
        return MetricsParser()

    def test_parse_usage(self) -> None:
        usage = MetricsParser.parse_usage({"cpu": "250000000n", "memory": "131072Ki"})
        assert usage.cpu_usage == 250
        assert usage.memory_usage == 128

    def test_parse_usage_not_a_mapping(self) -> None:
        usage = MetricsParser.parse_usage(None)
        assert (usage.cpu_usage, usage.memory_usage) == (0, 0)

    def test_parse_node_metrics(self, parser: MetricsParser) -> None:
        node = parser.parse_node_metrics(
            {"metadata": {"name": "worker-1"}, "usage": {"cpu": "1200m", "memory": "3Gi"}}
        )
        assert node.name == "worker-1"
        assert node.usage.cpu_usage == 1200
        assert node.usage.memory_usage == 3072

    def test_parse_pod_metrics(self, parser: MetricsParser) -> None:
        pod = parser.parse_pod_metrics(
            {
                "metadata": {"name": "web-0", "namespace": "shop"},
                "containers": [
                    {"name": "app", "usage": {"cpu": "100m", "memory": "128Mi"}},
                    {"name": "sidecar", "usage": {"cpu": "5m", "memory": "10Mi"}},
                ],
            }
        )
        assert pod.key == ("shop", "web-0")
        assert [container.name for container in pod.containers] == ["app", "sidecar"]
        assert pod.containers[0].usage.cpu_usage == 100

    def test_parse_lists(self, parser: MetricsParser) -> None:
        assert parser.parse_node_metrics_list([]) == []
        pods = parser.parse_pod_metrics_list(
            [{"metadata": {"name": "a", "namespace": "ns"}, "containers": []}]
        )
        assert pods[0].containers == []
