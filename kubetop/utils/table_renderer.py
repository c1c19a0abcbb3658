"""Terminal rendering of report tables with rich."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from kubetop.constants.values import BELOW_WATERMARK_STYLE
from kubetop.presenters.report_presenter import ReportTable


def build_rich_table(table: ReportTable) -> Table:
    """Convert a ReportTable into a borderless, left-aligned rich Table."""
    rich_table = Table(
        box=None,
        show_edge=False,
        show_lines=False,
        pad_edge=False,
        header_style="bold",
    )
    for header in table.headers:
        rich_table.add_column(header, justify="left", no_wrap=True)
    for row in table.rows:
        rich_table.add_row(
            *(
                Text(cell.text, style=BELOW_WATERMARK_STYLE if cell.below_watermark else "")
                for cell in row
            )
        )
    return rich_table


def render_table(table: ReportTable, console: Console | None = None) -> None:
    """Print the table to stdout (or the given console)."""
    (console or Console()).print(build_rich_table(table))
