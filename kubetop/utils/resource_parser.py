"""Resource parsing utilities for CPU and memory quantities.

Converts Kubernetes quantity strings into the integer units used by every
report:
- CPU: millicores (int), fractions of a millicore round up
- Memory: bytes (int), then whole mebibytes (MiB)

Requests, limits, allocatable, capacity and usage all go through the same
functions so that ratios stay dimensionally consistent.
"""

from __future__ import annotations

import logging
import math
import re
from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Any

from kubetop.constants.values import MEBIBYTE, MILLICORES_PER_CORE

logger = logging.getLogger(__name__)

# Module-level constants to avoid re-creating on every function call.
_SUFFIX_MULTIPLIERS: dict[str, Decimal] = {
    "n": Decimal("1e-9"),
    "u": Decimal("1e-6"),
    "m": Decimal("1e-3"),
    "": Decimal(1),
    "k": Decimal(10) ** 3,
    "M": Decimal(10) ** 6,
    "G": Decimal(10) ** 9,
    "T": Decimal(10) ** 12,
    "P": Decimal(10) ** 15,
    "E": Decimal(10) ** 18,
    "Ki": Decimal(1024),
    "Mi": Decimal(1024) ** 2,
    "Gi": Decimal(1024) ** 3,
    "Ti": Decimal(1024) ** 4,
    "Pi": Decimal(1024) ** 5,
    "Ei": Decimal(1024) ** 6,
}

_QUANTITY_PATTERN = re.compile(
    r"^(?P<number>[+-]?(?:\d+(?:\.\d*)?|\.\d+))"
    r"(?:[eE](?P<exponent>[+-]?\d+))?"
    r"(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|[numkMGTPE])?$"
)


def parse_quantity(value: Any) -> Decimal | None:
    """Parse a Kubernetes quantity into base units.

    Handles the suffix forms Kubernetes accepts:
    - Decimal SI: "500m" -> 0.5, "2k" -> 2000, "1G" -> 1e9
    - Binary SI: "512Mi" -> 536870912, "1Gi" -> 1073741824
    - Exponent: "1e3" -> 1000
    - Plain numbers: "2", "1.5", 3

    Args:
        value: Quantity as string or number.

    Returns:
        Quantity as Decimal, or None when the value is empty or unparsable.
        Negative quantities are clamped to zero.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return max(Decimal(str(value)), Decimal(0))

    text = str(value).strip()
    if not text:
        return None

    match = _QUANTITY_PATTERN.match(text)
    if match is None:
        logger.debug("Ignoring unparsable quantity %r", text)
        return None

    try:
        number = Decimal(match.group("number"))
    except InvalidOperation:
        logger.debug("Ignoring unparsable quantity %r", text)
        return None

    exponent = match.group("exponent")
    if exponent is not None:
        number = number.scaleb(int(exponent))

    quantity = number * _SUFFIX_MULTIPLIERS[match.group("suffix") or ""]
    return max(quantity, Decimal(0))


def parse_cpu(cpu_str: Any) -> int:
    """Parse a CPU quantity to millicores.

    Examples: "100m" -> 100, "1.5" -> 1500, "250000000n" -> 250.
    Fractions of a millicore round up, as Kubernetes does.

    Returns:
        CPU in millicores. Returns 0 for an empty or unparsable value.
    """
    quantity = parse_quantity(cpu_str)
    if quantity is None:
        return 0
    return int((quantity * MILLICORES_PER_CORE).to_integral_value(rounding=ROUND_CEILING))


def memory_str_to_bytes(memory_str: Any) -> int:
    """Convert a memory quantity to bytes.

    Examples: "1024Ki" -> 1048576, "1G" -> 1000000000, "512Mi" -> 536870912.

    Returns:
        Memory in bytes. Returns 0 for an empty or unparsable value.
    """
    quantity = parse_quantity(memory_str)
    if quantity is None:
        return 0
    return int(quantity.to_integral_value(rounding=ROUND_CEILING))


def bytes_to_mebibytes(value: int) -> int:
    """Truncate a byte count to whole mebibytes."""
    return max(int(value), 0) // MEBIBYTE


def parse_memory(memory_str: Any) -> int:
    """Parse a memory quantity straight to whole mebibytes (MiB)."""
    return bytes_to_mebibytes(memory_str_to_bytes(memory_str))


def parse_cpu_from_dict(values: Any, resource_type: str) -> int:
    """Parse CPU millicores from a container ``resources`` mapping.

    Utility function to extract and parse CPU from a structure like:
    {"requests": {"cpu": "100m"}, "limits": {"cpu": "500m"}}

    Args:
        values: The container's ``resources`` dictionary
        resource_type: "requests" or "limits"

    Returns:
        CPU in millicores. Returns 0 when the dimension is not declared.
    """
    if not isinstance(values, dict):
        return 0
    section = values.get(resource_type)
    if not isinstance(section, dict):
        return 0
    return parse_cpu(section.get("cpu"))


def parse_memory_from_dict(values: Any, resource_type: str) -> int:
    """Parse memory mebibytes from a container ``resources`` mapping.

    Args:
        values: The container's ``resources`` dictionary
        resource_type: "requests" or "limits"

    Returns:
        Memory in MiB. Returns 0 when the dimension is not declared.
    """
    if not isinstance(values, dict):
        return 0
    section = values.get(resource_type)
    if not isinstance(section, dict):
        return 0
    return parse_memory(section.get("memory"))
