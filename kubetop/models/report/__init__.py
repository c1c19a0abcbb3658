"""Report records and output value types."""

from kubetop.models.report.output_values import (
    IntegerQuantity,
    OutputValue,
    PercentageOrAbsent,
    TextValue,
    format_output_value,
)
from kubetop.models.report.utilization_info import (
    ContainerReportInfo,
    NodeReportInfo,
    PodReportInfo,
    UtilizationRatio,
)

__all__ = [
    "ContainerReportInfo",
    "IntegerQuantity",
    "NodeReportInfo",
    "OutputValue",
    "PercentageOrAbsent",
    "PodReportInfo",
    "TextValue",
    "UtilizationRatio",
    "format_output_value",
]
