"""Node fetcher for cluster controller - fetches node data from Kubernetes cluster."""

from __future__ import annotations

from typing import Any

from kubetop.controllers.cluster.fetchers.base_fetcher import KubectlFetcher, PayloadError
from kubetop.errors import InventoryUnavailableError, KubectlCommandError
from kubetop.utils.deadline import Deadline


class NodeFetcher(KubectlFetcher):
    """Fetches node data from Kubernetes cluster."""

    async def fetch_nodes_raw(self, deadline: Deadline) -> list[dict[str, Any]]:
        """Fetch raw node items (allocatable and capacity live in ``status``).

        Raises:
            InventoryUnavailableError: If the listing call fails.
        """
        args = ("get", "nodes", "-o", "json", deadline.request_timeout_arg())
        try:
            output = await self._run_kubectl(args, deadline)
            return self._decode_items(output, "nodes")
        except (KubectlCommandError, PayloadError) as exc:
            raise InventoryUnavailableError(f"failed to list nodes: {exc}") from exc
