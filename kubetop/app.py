"""Main application class for kubetop reports."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from rich.console import Console

from kubetop.constants.defaults import (
    NAMESPACE_DEFAULT,
    NODE_SORT_KEY_DEFAULT,
    POD_SORT_KEY_DEFAULT,
)
from kubetop.constants.enums import NodeSortKey, PodSortKey, ReportScope
from kubetop.controllers.base import BaseController
from kubetop.controllers.cluster.controller import ClusterController
from kubetop.engine.ranker import (
    rank_nodes,
    rank_pods,
    resolve_node_sort_key,
    resolve_pod_sort_key,
)
from kubetop.errors import KubetopError, ReportTimeoutError
from kubetop.models.state.app_settings import ReportSettings
from kubetop.presenters.report_presenter import ReportPresenter, ReportTable
from kubetop.utils.deadline import Deadline
from kubetop.utils.table_renderer import render_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PodReportRequest:
    """Options of a pod-scope report."""

    namespace: str = NAMESPACE_DEFAULT
    sort_key: str = POD_SORT_KEY_DEFAULT
    by_container: bool = False
    wide: bool = False
    group_by_workload: bool | None = None


@dataclass(frozen=True)
class NodeReportRequest:
    """Options of a node-scope report."""

    sort_key: str = NODE_SORT_KEY_DEFAULT
    wide: bool = False


class ReportApp:
    """Runs one report: validate, collect under a deadline, rank, render."""

    def __init__(
        self,
        settings: ReportSettings | None = None,
        controller: BaseController | None = None,
        console: Console | None = None,
    ) -> None:
        self.settings = settings or ReportSettings()
        self.controller = controller or ClusterController(
            context=self.settings.context,
            max_workers=self.settings.max_workers,
        )
        self.presenter = ReportPresenter(watermark=self.settings.watermark)
        self.console = console

    async def _collect(
        self,
        scope: ReportScope,
        namespace: str | None = None,
    ) -> list[Any]:
        deadline = Deadline(self.settings.report_timeout_seconds)
        logger.debug(
            "Collecting %s report with a %.1fs deadline",
            scope.value,
            self.settings.report_timeout_seconds,
        )
        try:
            return await asyncio.wait_for(
                self.controller.build_report(scope, deadline, namespace),
                timeout=self.settings.report_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise ReportTimeoutError("collection", self.settings.report_timeout_seconds) from exc
        except KubetopError:
            for source, message in self.controller.get_failed_sources().items():
                logger.info("Data source %s failed: %s", source, message)
            raise

    async def build_pod_table(self, request: PodReportRequest) -> ReportTable:
        """Collect, rank and present a pod report.

        The sort key is validated before any cluster call.
        """
        sort_key: PodSortKey = resolve_pod_sort_key(request.sort_key)
        group_by_workload = (
            self.settings.group_by_workload
            if request.group_by_workload is None
            else request.group_by_workload
        )
        reports = await self._collect(ReportScope.POD, request.namespace)
        ranked = rank_pods(
            reports,
            sort_key,
            group_by_workload=group_by_workload,
            by_container=request.by_container,
            high_replica_fragments=self.settings.high_replica_name_fragments,
            truncate_limit=self.settings.truncate_limit,
        )
        return self.presenter.pod_table(
            ranked,
            by_container=request.by_container,
            wide=request.wide,
        )

    async def build_node_table(self, request: NodeReportRequest) -> ReportTable:
        """Collect, rank and present a node report."""
        sort_key: NodeSortKey = resolve_node_sort_key(request.sort_key)
        reports = await self._collect(ReportScope.NODE)
        return self.presenter.node_table(rank_nodes(reports, sort_key), wide=request.wide)

    def run_pod_report(self, request: PodReportRequest) -> ReportTable:
        table = asyncio.run(self.build_pod_table(request))
        render_table(table, self.console)
        return table

    def run_node_report(self, request: NodeReportRequest) -> ReportTable:
        table = asyncio.run(self.build_node_table(request))
        render_table(table, self.console)
        return table
