"""Namespace fetcher for cluster controller - validates the pod-scope boundary."""

from __future__ import annotations

import logging

from kubetop.controllers.cluster.fetchers.base_fetcher import KubectlFetcher, PayloadError
from kubetop.errors import InventoryUnavailableError, KubectlCommandError
from kubetop.utils.deadline import Deadline

logger = logging.getLogger(__name__)


class NamespaceFetcher(KubectlFetcher):
    """Fetches namespace names from Kubernetes cluster."""

    async def list_namespaces(self, deadline: Deadline) -> list[str]:
        """Return every namespace name, sorted.

        Raises:
            InventoryUnavailableError: If the listing call fails.
        """
        args = ("get", "namespaces", "-o", "json", deadline.request_timeout_arg())
        try:
            output = await self._run_kubectl(args, deadline)
            items = self._decode_items(output, "namespaces")
        except (KubectlCommandError, PayloadError) as exc:
            raise InventoryUnavailableError(f"failed to list namespaces: {exc}") from exc

        names = [
            str(item.get("metadata", {}).get("name", "") or "").strip()
            for item in items
        ]
        return sorted(name for name in names if name)

    async def namespace_exists(self, namespace: str, deadline: Deadline) -> bool:
        """Check whether the namespace is present in the cluster."""
        namespaces = await self.list_namespaces(deadline)
        exists = namespace in namespaces
        if not exists:
            logger.info("Namespace %s not found among %d namespaces", namespace, len(namespaces))
        return exists
