"""Tests for cluster controller."""

from __future__ import annotations

import json
import subprocess
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

from kubetop.constants.enums import ReportScope
from kubetop.controllers.cluster.controller import ClusterController
from kubetop.errors import (
    EmptyScopeError,
    InventoryUnavailableError,
    KubectlCommandError,
    MetricsUnavailableError,
    ReportTimeoutError,
    ScopeNotFoundError,
)
from kubetop.utils.deadline import Deadline

NODE_METRICS = "/apis/metrics.k8s.io/v1beta1/nodes"


def _list(items: list[dict[str, Any]]) -> str:
    return json.dumps({"items": items})


def _namespace(name: str) -> dict[str, Any]:
    return {"metadata": {"name": name}}


def _container(name: str, cpu: str | None = None, memory: str | None = None) -> dict[str, Any]:
    requests = {}
    if cpu:
        requests["cpu"] = cpu
    if memory:
        requests["memory"] = memory
    return {"name": name, "resources": {"requests": requests}}


def _pod(
    name: str,
    namespace: str = "shop",
    node: str = "n1",
    phase: str = "Running",
    containers: list[dict[str, Any]] | None = None,
    init_containers: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    return {
        "metadata": {"name": name, "namespace": namespace},
        "spec": {
            "nodeName": node,
            "containers": containers or [],
            "initContainers": init_containers or [],
        },
        "status": {"phase": phase},
    }


def _pod_metrics(name: str, namespace: str = "shop", **containers: tuple[str, str]) -> dict[str, Any]:
    return {
        "metadata": {"name": name, "namespace": namespace},
        "containers": [
            {"name": container, "usage": {"cpu": cpu, "memory": memory}}
            for container, (cpu, memory) in containers.items()
        ],
    }


def _node(name: str, cpu: str, memory: str) -> dict[str, Any]:
    return {
        "metadata": {"name": name},
        "status": {
            "allocatable": {"cpu": cpu, "memory": memory},
            "capacity": {"cpu": cpu, "memory": memory},
        },
    }


def _node_metrics(name: str, cpu: str, memory: str) -> dict[str, Any]:
    return {"metadata": {"name": name}, "usage": {"cpu": cpu, "memory": memory}}


class FakeKubectl:
    """Routes kubectl argument tuples to canned outputs or errors."""

    def __init__(self, routes: dict[str, str | Exception]) -> None:
        self.routes = routes
        self.calls: list[tuple[str, ...]] = []
        self.on_call: Callable[[tuple[str, ...]], None] | None = None

    @staticmethod
    def route_key(args: tuple[str, ...]) -> str:
        if args[1] == "--raw":
            return args[2]
        if args[1] == "pods":
            return "pods -n " + args[3] if args[2] == "-n" else "pods --all-namespaces"
        return args[1]

    def __call__(self, args: tuple[str, ...], timeout: float) -> str:
        self.calls.append(args)
        if self.on_call is not None:
            self.on_call(args)
        result = self.routes.get(self.route_key(args))
        if result is None:
            raise KubectlCommandError(f"no route for {args}", 1)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def controller() -> ClusterController:
    """Create ClusterController instance."""
    return ClusterController(context="my-cluster", max_workers=4)


def _install(controller: ClusterController, routes: dict[str, str | Exception]) -> FakeKubectl:
    fake = FakeKubectl(routes)
    controller._run_kubectl_sync = fake  # type: ignore[method-assign]
    return fake


def _shop_routes() -> dict[str, str | Exception]:
    return {
        "namespaces": _list([_namespace("default"), _namespace("shop")]),
        "pods -n shop": _list(
            [
                _pod(
                    "web-0",
                    containers=[_container("app", "500m", "256Mi")],
                    init_containers=[_container("migrate", "4", "4Gi")],
                ),
                _pod("web-1", containers=[_container("app", "500m", "256Mi")]),
                _pod("worker-5d9c-x", containers=[_container("job", "100m")]),
            ]
        ),
        "/apis/metrics.k8s.io/v1beta1/namespaces/shop/pods": _list(
            [
                _pod_metrics("web-0", app=("100m", "128Mi")),
                _pod_metrics("worker-5d9c-x", job=("50m", "64Mi")),
                _pod_metrics("stray-pod", app=("1m", "1Mi")),
            ]
        ),
    }


class TestClusterControllerRunner:
    """Tests for the kubectl runner."""

    def test_controller_init(self, controller: ClusterController) -> None:
        assert controller.context == "my-cluster"
        assert controller._aggregator.max_workers == 4
        assert controller.get_failed_sources() == {}

    def test_run_kubectl_sync_adds_context(
        self, controller: ClusterController, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        run = MagicMock(return_value=SimpleNamespace(returncode=0, stdout="ok", stderr=""))
        monkeypatch.setattr("kubetop.controllers.cluster.controller.subprocess.run", run)

        assert controller._run_kubectl_sync(("get", "nodes"), 3.0) == "ok"

        cmd = run.call_args.args[0]
        assert cmd == ["kubectl", "--context", "my-cluster", "get", "nodes"]
        assert run.call_args.kwargs["timeout"] == 3.0

    def test_run_kubectl_sync_without_context(self, monkeypatch: pytest.MonkeyPatch) -> None:
        run = MagicMock(return_value=SimpleNamespace(returncode=0, stdout="", stderr=""))
        monkeypatch.setattr("kubetop.controllers.cluster.controller.subprocess.run", run)

        ClusterController()._run_kubectl_sync(("get", "nodes"), 1.0)

        assert run.call_args.args[0] == ["kubectl", "get", "nodes"]

    def test_run_kubectl_sync_nonzero_exit(
        self, controller: ClusterController, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        run = MagicMock(
            return_value=SimpleNamespace(returncode=1, stdout="", stderr=" forbidden \n")
        )
        monkeypatch.setattr("kubetop.controllers.cluster.controller.subprocess.run", run)

        with pytest.raises(KubectlCommandError) as exc_info:
            controller._run_kubectl_sync(("get", "nodes"), 1.0)
        assert exc_info.value.stderr == "forbidden"
        assert exc_info.value.returncode == 1

    @pytest.mark.asyncio
    async def test_run_kubectl_timeout(self, controller: ClusterController) -> None:
        _install(
            controller,
            {"nodes": subprocess.TimeoutExpired(cmd="kubectl", timeout=1)},
        )

        with pytest.raises(ReportTimeoutError):
            await controller._run_kubectl(("get", "nodes"), Deadline(5.0))

    @pytest.mark.asyncio
    async def test_run_kubectl_missing_binary(self, controller: ClusterController) -> None:
        _install(controller, {"nodes": FileNotFoundError("kubectl")})

        with pytest.raises(InventoryUnavailableError):
            await controller._run_kubectl(("get", "nodes"), Deadline(5.0))

    @pytest.mark.asyncio
    async def test_run_kubectl_refuses_expired_deadline(
        self, controller: ClusterController
    ) -> None:
        fake = _install(controller, {"nodes": _list([])})
        clock = SimpleNamespace(now=0.0)
        deadline = Deadline(1.0, clock=lambda: clock.now)
        clock.now = 2.0

        with pytest.raises(ReportTimeoutError):
            await controller._run_kubectl(("get", "nodes"), deadline)
        assert fake.calls == []


class TestBuildPodReport:
    """Tests for ClusterController.build_pod_report."""

    @pytest.mark.asyncio
    async def test_pod_report_ratios(self, controller: ClusterController) -> None:
        _install(controller, _shop_routes())

        reports = await controller.build_pod_report("shop", Deadline(5.0))

        by_name = {report.pod_name: report for report in reports}
        web = by_name["web-0"]
        assert web.node_name == "n1"
        assert web.ratio.cpu_request_pct == pytest.approx(20.0)
        assert web.ratio.memory_request_pct == pytest.approx(50.0)
        assert web.ratio.cpu_limit_pct is None
        assert web.resources.cpu_requests == 500

    @pytest.mark.asyncio
    async def test_init_container_usage_not_in_pod_ratio(
        self, controller: ClusterController
    ) -> None:
        routes = _shop_routes()
        routes["/apis/metrics.k8s.io/v1beta1/namespaces/shop/pods"] = _list(
            [_pod_metrics("web-0", app=("100m", "128Mi"), migrate=("900m", "1Gi"))]
        )
        _install(controller, routes)

        (web,) = await controller.build_pod_report("shop", Deadline(5.0))

        assert web.usage.cpu_usage == 100
        assert web.ratio.cpu_request_pct == pytest.approx(20.0)
        assert web.ratio.memory_request_pct == pytest.approx(50.0)

    @pytest.mark.asyncio
    async def test_pod_report_is_inner_join(self, controller: ClusterController) -> None:
        _install(controller, _shop_routes())

        reports = await controller.build_pod_report("shop", Deadline(5.0))

        assert [report.pod_name for report in reports] == ["web-0", "worker-5d9c-x"]

    @pytest.mark.asyncio
    async def test_pod_report_memory_without_request_is_no_data(
        self, controller: ClusterController
    ) -> None:
        _install(controller, _shop_routes())

        reports = await controller.build_pod_report("shop", Deadline(5.0))

        worker = next(report for report in reports if report.pod_name == "worker-5d9c-x")
        assert worker.ratio.memory_request_pct is None
        assert worker.ratio.cpu_request_pct == pytest.approx(50.0)

    @pytest.mark.asyncio
    async def test_missing_namespace(self, controller: ClusterController) -> None:
        fake = _install(controller, _shop_routes())

        with pytest.raises(ScopeNotFoundError) as exc_info:
            await controller.build_pod_report("ghost", Deadline(5.0))

        assert exc_info.value.exit_code == 3
        assert [call[1] for call in fake.calls] == ["namespaces"]

    @pytest.mark.asyncio
    async def test_empty_namespace(self, controller: ClusterController) -> None:
        routes = _shop_routes()
        routes["pods -n shop"] = _list([])
        _install(controller, routes)

        with pytest.raises(EmptyScopeError):
            await controller.build_pod_report("shop", Deadline(5.0))
        assert controller.get_failed_sources() == {
            "aggregation": "no entities found in namespace 'shop'"
        }

    @pytest.mark.asyncio
    async def test_metrics_unavailable(self, controller: ClusterController) -> None:
        routes = _shop_routes()
        routes["/apis/metrics.k8s.io/v1beta1/namespaces/shop/pods"] = KubectlCommandError(
            "the server could not find the requested resource", 1
        )
        _install(controller, routes)

        with pytest.raises(MetricsUnavailableError):
            await controller.build_pod_report("shop", Deadline(5.0))
        assert set(controller.get_failed_sources()) == {"metrics"}

    @pytest.mark.asyncio
    async def test_timeout_at_aggregation_barrier(self, controller: ClusterController) -> None:
        clock = SimpleNamespace(now=0.0)
        deadline = Deadline(5.0, clock=lambda: clock.now)
        fake = _install(controller, _shop_routes())

        def _slow_metrics(args: tuple[str, ...]) -> None:
            if args[1] == "--raw":
                clock.now += 10.0

        fake.on_call = _slow_metrics

        with pytest.raises(ReportTimeoutError) as exc_info:
            await controller.build_pod_report("shop", deadline)
        assert exc_info.value.stage == "aggregation"

    @pytest.mark.asyncio
    async def test_build_report_dispatch(self, controller: ClusterController) -> None:
        _install(controller, _shop_routes())

        reports = await controller.build_report(ReportScope.POD, Deadline(5.0), "shop")
        assert len(reports) == 2

        with pytest.raises(ValueError):
            await controller.build_report(ReportScope.POD, Deadline(5.0))


class TestBuildNodeReport:
    """Tests for ClusterController.build_node_report."""

    @staticmethod
    def _routes() -> dict[str, str | Exception]:
        return {
            "nodes": _list(
                [
                    _node("n1", "4", "8Gi"),
                    _node("n2", "4", "8Gi"),
                    _node("n3", "2", "4Gi"),
                ]
            ),
            "pods --all-namespaces": _list(
                [
                    _pod("a", node="n1", containers=[_container("c", "3", "1Gi")]),
                    _pod("b", node="n1", containers=[_container("c", "1500m", "1Gi")]),
                    _pod(
                        "done",
                        node="n2",
                        phase="Succeeded",
                        containers=[_container("c", "2", "2Gi")],
                    ),
                    _pod("unbound", node="", phase="Pending", containers=[_container("c", "1")]),
                ]
            ),
            NODE_METRICS: _list(
                [
                    _node_metrics("n1", "2", "4Gi"),
                    _node_metrics("n2", "1", "2Gi"),
                ]
            ),
        }

    @pytest.mark.asyncio
    async def test_overcommitted_node_remaining_is_zero(
        self, controller: ClusterController
    ) -> None:
        _install(controller, self._routes())

        reports = await controller.build_node_report(Deadline(5.0))

        n1 = next(report for report in reports if report.name == "n1")
        assert n1.allocated.cpu_requests == 4500
        assert n1.cpu_remaining == 0
        assert n1.cpu_remaining_pct == 0.0
        assert n1.cpu_utilization_pct == pytest.approx(50.0)
        assert n1.memory_remaining_pct == pytest.approx(75.0)
        assert n1.pod_count == 2

    @pytest.mark.asyncio
    async def test_completed_pods_hold_no_allocation(
        self, controller: ClusterController
    ) -> None:
        _install(controller, self._routes())

        reports = await controller.build_node_report(Deadline(5.0))

        n2 = next(report for report in reports if report.name == "n2")
        assert n2.allocated.cpu_requests == 0
        assert n2.cpu_remaining_pct == pytest.approx(100.0)

    @pytest.mark.asyncio
    async def test_node_without_metrics_is_dropped(self, controller: ClusterController) -> None:
        _install(controller, self._routes())

        reports = await controller.build_node_report(Deadline(5.0))

        assert [report.name for report in reports] == ["n1", "n2"]

    @pytest.mark.asyncio
    async def test_no_nodes(self, controller: ClusterController) -> None:
        routes = self._routes()
        routes["nodes"] = _list([])
        _install(controller, routes)

        with pytest.raises(EmptyScopeError):
            await controller.build_node_report(Deadline(5.0))

    @pytest.mark.asyncio
    async def test_node_metrics_unavailable(self, controller: ClusterController) -> None:
        routes = self._routes()
        routes[NODE_METRICS] = KubectlCommandError("service unavailable", 1)
        _install(controller, routes)

        with pytest.raises(MetricsUnavailableError):
            await controller.build_node_report(Deadline(5.0))
