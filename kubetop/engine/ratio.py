"""Utilization and remaining-capacity arithmetic.

Every function returns ``None`` for a zero or absent denominator; callers
render that as "no data" instead of 0% or 100%.
"""

from __future__ import annotations

from kubetop.models.core.resource_info import ResourceTotals
from kubetop.models.core.usage_info import UsageTotals
from kubetop.models.report.utilization_info import UtilizationRatio


def calculate_ratio(usage: int, denominator: int | None) -> float | None:
    """Return ``usage / denominator * 100`` or None when it is undefined."""
    if not denominator or denominator <= 0:
        return None
    return max(usage, 0) / denominator * 100


def calculate_remaining(allocatable: int, allocated: int) -> int:
    """Unallocated amount, never below zero under overcommit."""
    return max(allocatable - allocated, 0)


def remaining_percentage(allocatable: int, allocated: int) -> float | None:
    """Share of allocatable not yet requested, clamped to [0, 100]."""
    if allocatable <= 0:
        return None
    percent = calculate_remaining(allocatable, allocated) / allocatable * 100
    return min(percent, 100.0)


def utilization_ratio(resources: ResourceTotals, usage: UsageTotals) -> UtilizationRatio:
    """Compute request and limit ratios for both dimensions."""
    return UtilizationRatio(
        cpu_request_pct=calculate_ratio(usage.cpu_usage, resources.cpu_requests),
        cpu_limit_pct=calculate_ratio(usage.cpu_usage, resources.cpu_limits),
        memory_request_pct=calculate_ratio(usage.memory_usage, resources.memory_requests),
        memory_limit_pct=calculate_ratio(usage.memory_usage, resources.memory_limits),
    )
