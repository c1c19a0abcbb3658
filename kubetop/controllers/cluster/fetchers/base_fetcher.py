"""Shared plumbing for kubectl-backed fetchers."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from kubetop.utils.deadline import Deadline

logger = logging.getLogger(__name__)

RunKubectl = Callable[[tuple[str, ...], Deadline], Awaitable[str]]


class PayloadError(ValueError):
    """Raised when kubectl output is not a JSON list response."""


class KubectlFetcher:
    """Base class holding the kubectl runner shared by all fetchers."""

    def __init__(self, run_kubectl_func: RunKubectl) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function running kubectl with a deadline
        """
        self._run_kubectl = run_kubectl_func

    @staticmethod
    def _decode_items(output: str, source: str) -> list[dict[str, Any]]:
        """Decode a kubectl ``-o json`` / ``get --raw`` list response into items."""
        if not output or not output.strip():
            raise PayloadError(f"empty response for {source}")
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            logger.debug("Undecodable %s payload: %.200s", source, output)
            raise PayloadError(f"invalid JSON for {source}: {exc}") from exc
        if not isinstance(data, dict):
            raise PayloadError(f"unexpected payload for {source}")
        items = data.get("items")
        if items is None:
            return []
        if not isinstance(items, list):
            raise PayloadError(f"unexpected items for {source}")
        return [item for item in items if isinstance(item, dict)]
