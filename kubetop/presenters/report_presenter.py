"""Report presenter - turns ranked records into display rows."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from kubetop.constants.defaults import WATERMARK_DEFAULT
from kubetop.constants.values import (
    NODE_HEADERS,
    NODE_WIDE_HEADERS,
    POD_CONTAINER_HEADERS,
    POD_HEADERS,
    POD_WIDE_HEADERS,
)
from kubetop.models.core.resource_info import ResourceTotals
from kubetop.models.core.usage_info import UsageTotals
from kubetop.models.report.output_values import (
    IntegerQuantity,
    OutputValue,
    PercentageOrAbsent,
    TextValue,
    format_output_value,
)
from kubetop.models.report.utilization_info import (
    NodeReportInfo,
    PodReportInfo,
    UtilizationRatio,
)


@dataclass(frozen=True)
class DisplayCell:
    """One rendered table cell and whether it falls under the watermark."""

    text: str
    below_watermark: bool = False


@dataclass
class ReportTable:
    """Headers plus fixed-width rows of display cells."""

    headers: tuple[str, ...]
    rows: list[tuple[DisplayCell, ...]] = field(default_factory=list)

    def text_rows(self) -> list[tuple[str, ...]]:
        return [tuple(cell.text for cell in row) for row in self.rows]


class ReportPresenter:
    """Presenter for pod and node report tables."""

    def __init__(self, watermark: float = WATERMARK_DEFAULT) -> None:
        self.watermark = watermark

    def _cell(self, value: OutputValue, flag_below: bool = False) -> DisplayCell:
        below = (
            flag_below
            and isinstance(value, PercentageOrAbsent)
            and value.is_below(self.watermark)
        )
        return DisplayCell(format_output_value(value), below)

    def _ratio_cells(self, ratio: UtilizationRatio) -> tuple[DisplayCell, ...]:
        return tuple(
            self._cell(PercentageOrAbsent(value), flag_below=True)
            for value in (
                ratio.cpu_request_pct,
                ratio.memory_request_pct,
                ratio.cpu_limit_pct,
                ratio.memory_limit_pct,
            )
        )

    def _quantity_cells(
        self,
        resources: ResourceTotals,
        usage: UsageTotals | None,
    ) -> tuple[DisplayCell, ...]:
        values: Sequence[int | None] = (
            resources.cpu_requests,
            resources.cpu_limits,
            usage.cpu_usage if usage is not None else None,
            resources.memory_requests,
            resources.memory_limits,
            usage.memory_usage if usage is not None else None,
        )
        return tuple(self._cell(IntegerQuantity(value)) for value in values)

    def pod_table(
        self,
        reports: Iterable[PodReportInfo],
        *,
        by_container: bool = False,
        wide: bool = False,
    ) -> ReportTable:
        """Build pod rows, or one row per container when ``by_container``."""
        headers = POD_CONTAINER_HEADERS if by_container else POD_HEADERS
        table = ReportTable(headers=headers + POD_WIDE_HEADERS if wide else headers)

        for report in reports:
            identity = (
                self._cell(TextValue(report.node_name)),
                self._cell(TextValue(report.pod_name)),
            )
            if not by_container:
                row = identity + self._ratio_cells(report.ratio)
                if wide:
                    row += self._quantity_cells(report.resources, report.usage)
                table.rows.append(row)
                continue

            for container in report.containers:
                row = (
                    identity
                    + (self._cell(TextValue(container.name)),)
                    + self._ratio_cells(container.ratio)
                )
                if wide:
                    row += self._quantity_cells(container.resources, container.usage)
                table.rows.append(row)
        return table

    def node_table(
        self,
        reports: Iterable[NodeReportInfo],
        *,
        wide: bool = False,
    ) -> ReportTable:
        """Build node rows; low request headroom is flagged."""
        table = ReportTable(headers=NODE_HEADERS + NODE_WIDE_HEADERS if wide else NODE_HEADERS)

        for report in reports:
            row = (
                self._cell(TextValue(report.name)),
                self._cell(PercentageOrAbsent(report.cpu_remaining_pct), flag_below=True),
                self._cell(PercentageOrAbsent(report.cpu_utilization_pct)),
                self._cell(PercentageOrAbsent(report.memory_remaining_pct), flag_below=True),
                self._cell(PercentageOrAbsent(report.memory_utilization_pct)),
            )
            if wide:
                row += tuple(
                    self._cell(IntegerQuantity(value))
                    for value in (
                        report.cpu_allocatable,
                        report.allocated.cpu_requests,
                        report.cpu_remaining,
                        report.memory_allocatable,
                        report.allocated.memory_requests,
                        report.memory_remaining,
                    )
                )
            table.rows.append(row)
        return table
