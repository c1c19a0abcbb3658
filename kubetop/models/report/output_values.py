"""Typed output values handed to the table presenter.

``OutputValue`` is a closed set of cell types; ``format_output_value`` is the
single formatter over it.
"""

from __future__ import annotations

from dataclasses import dataclass

from kubetop.constants.values import NO_DATA


@dataclass(frozen=True)
class TextValue:
    """Plain text cell such as an entity name."""

    value: str


@dataclass(frozen=True)
class IntegerQuantity:
    """Whole-unit quantity (millicores or MiB); ``None`` renders as no data."""

    value: int | None


@dataclass(frozen=True)
class PercentageOrAbsent:
    """Percentage cell; ``None`` is the "no data" sentinel."""

    value: float | None

    def is_below(self, watermark: float) -> bool:
        return self.value is not None and self.value < watermark


OutputValue = TextValue | IntegerQuantity | PercentageOrAbsent


def format_output_value(value: OutputValue) -> str:
    """Render an output value as display text.

    A real zero stays visible ("0", "0.00%"); only absent values become the dash.
    """
    if isinstance(value, TextValue):
        return value.value
    if isinstance(value, IntegerQuantity):
        return NO_DATA if value.value is None else str(value.value)
    if isinstance(value, PercentageOrAbsent):
        return NO_DATA if value.value is None else f"{value.value:.2f}%"
    raise TypeError(f"Unsupported output value type: {type(value).__name__}")
