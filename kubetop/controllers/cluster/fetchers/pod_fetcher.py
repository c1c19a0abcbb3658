"""Pod fetcher for cluster controller - fetches pod specs from Kubernetes cluster."""

from __future__ import annotations

import re
from typing import Any

from kubetop.controllers.cluster.fetchers.base_fetcher import KubectlFetcher, PayloadError
from kubetop.errors import (
    InventoryUnavailableError,
    KubectlCommandError,
    ScopeNotFoundError,
)
from kubetop.utils.deadline import Deadline

_NAMESPACE_NOT_FOUND_RE = re.compile(r'namespaces "(?P<name>[^"]+)" not found')


class PodFetcher(KubectlFetcher):
    """Fetches pod data from Kubernetes cluster."""

    @staticmethod
    def _is_namespace_not_found(error: Exception, namespace: str) -> bool:
        match = _NAMESPACE_NOT_FOUND_RE.search(str(error))
        return match is not None and match.group("name") == namespace

    async def fetch_pods_raw(
        self,
        deadline: Deadline,
        namespace: str | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch raw pod items for one namespace, or for all namespaces when None.

        Raises:
            ScopeNotFoundError: If the namespace disappeared before listing.
            InventoryUnavailableError: If the listing call fails.
        """
        args: list[str] = ["get", "pods"]
        if namespace:
            args.extend(["-n", namespace])
        else:
            args.append("--all-namespaces")
        args.extend(["-o", "json", deadline.request_timeout_arg()])

        try:
            output = await self._run_kubectl(tuple(args), deadline)
            return self._decode_items(output, "pods")
        except KubectlCommandError as exc:
            if namespace and self._is_namespace_not_found(exc, namespace):
                raise ScopeNotFoundError(namespace) from exc
            scope = namespace or "all namespaces"
            raise InventoryUnavailableError(f"failed to list pods in {scope}: {exc}") from exc
        except PayloadError as exc:
            raise InventoryUnavailableError(f"failed to list pods: {exc}") from exc
