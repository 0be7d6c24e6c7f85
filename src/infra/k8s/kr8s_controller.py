"""Kr8s-based implementation of KubernetesController.

Uses the kr8s library for native async Kubernetes operations.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import kr8s
from kr8s.asyncio.objects import Deployment, Namespace, StatefulSet

from .controller import KubernetesController, NamespaceInfo, WatchEvent

_RESOURCE_CLASSES: dict[str, Any] = {
    "deployment": Deployment,
    "statefulset": StatefulSet,
}


class Kr8sController(KubernetesController):
    """Kubernetes controller using kr8s library.

    All methods are natively async, leveraging kr8s's async API.

    Note: The kr8s API client is NOT cached because it's tied to the event loop
    that was running when created. When using run_sync() which calls asyncio.run(),
    each call creates a new event loop, making the cached API unusable.
    """

    def __init__(self, kubeconfig: str | None = None) -> None:
        """Initialize the controller.

        Args:
            kubeconfig: Path to a kubeconfig file. kr8s falls back to
                        $KUBECONFIG, then ~/.kube/config, then in-cluster config.
        """
        self.kubeconfig = kubeconfig

    async def _get_api(self) -> Any:  # Returns kr8s._api.Api
        """Create a kr8s API client bound to the running event loop."""
        return await kr8s.asyncio.api(kubeconfig=self.kubeconfig)

    @staticmethod
    def _resource_class(kind: str) -> Any:
        try:
            return _RESOURCE_CLASSES[kind.lower()]
        except KeyError:
            raise ValueError(f"unsupported resource kind: {kind}") from None

    # =========================================================================
    # Namespace Operations
    # =========================================================================

    async def get_namespace(self, namespace: str) -> NamespaceInfo:
        """Fetch a namespace and its current resource version."""
        api = await self._get_api()
        ns = await Namespace.get(namespace, api=api)
        return NamespaceInfo(
            name=ns.name,
            resource_version=ns.metadata.get("resourceVersion", ""),
        )

    async def watch_namespace(self, namespace: NamespaceInfo) -> AsyncIterator[WatchEvent]:
        """Watch a single namespace from the given resource version."""
        api = await self._get_api()
        async for event_type, obj in api.watch(
            "namespaces",
            field_selector=f"metadata.name={namespace.name}",
            since=namespace.resource_version or None,
        ):
            yield WatchEvent(
                type=str(event_type).upper(),
                name=getattr(obj, "name", "") or namespace.name,
            )

    async def delete_namespace(
        self,
        namespace: str,
        *,
        propagation_policy: str = "Foreground",
    ) -> None:
        """Request deletion of a namespace."""
        api = await self._get_api()
        ns = await Namespace.get(namespace, api=api)
        await ns.delete(propagation_policy=propagation_policy)

    # =========================================================================
    # Workload Controller Operations
    # =========================================================================

    async def list_resource_names(self, kind: str, namespace: str) -> list[str]:
        """List resource names of a kind in a namespace."""
        resource_class = self._resource_class(kind)
        api = await self._get_api()
        return [r.name async for r in resource_class.list(namespace=namespace, api=api)]

    async def delete_resource(
        self,
        kind: str,
        name: str,
        namespace: str,
        *,
        propagation_policy: str = "Foreground",
    ) -> None:
        """Delete a single namespaced resource."""
        resource_class = self._resource_class(kind)
        api = await self._get_api()
        resource = await resource_class.get(name, namespace=namespace, api=api)
        await resource.delete(propagation_policy=propagation_policy)
