"""Abstract Kubernetes controller interface.

Defines the contract for the cluster operations the purge workflow needs.
The production backend is the kr8s library; tests substitute mocks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass

# =============================================================================
# Data Types
# =============================================================================


@dataclass
class NamespaceInfo:
    """A namespace as seen at a specific resource version."""

    name: str
    resource_version: str = ""


@dataclass
class WatchEvent:
    """A single event from a watch stream.

    ``type`` is upper-case as sent by the API server: ADDED, MODIFIED,
    DELETED, BOOKMARK or ERROR.
    """

    type: str
    name: str = ""


# =============================================================================
# Abstract Controller
# =============================================================================


class KubernetesController(ABC):
    """Abstract base class for Kubernetes operations.

    All methods are async. Implementations must be safe to call from
    several concurrently running tasks. Use `run_sync()` to call from
    synchronous code.

    Example:
        from src.infra.k8s import get_k8s_controller, run_sync

        controller = get_k8s_controller()
        names = run_sync(controller.list_resource_names("deployment", "my-namespace"))
    """

    # =========================================================================
    # Namespace Operations
    # =========================================================================

    @abstractmethod
    async def get_namespace(self, namespace: str) -> NamespaceInfo:
        """Fetch a namespace.

        Args:
            namespace: Namespace name

        Returns:
            NamespaceInfo with the current resource version

        Raises:
            Exception: If the namespace does not exist or the API call fails
        """
        ...

    @abstractmethod
    def watch_namespace(self, namespace: NamespaceInfo) -> AsyncIterator[WatchEvent]:
        """Watch a single namespace, starting at the given resource version.

        Nothing is sent to the API server until iteration starts; events
        after ``namespace.resource_version`` are delivered regardless.

        Args:
            namespace: The namespace to watch, as returned by get_namespace

        Returns:
            Async iterator of WatchEvent objects
        """
        ...

    @abstractmethod
    async def delete_namespace(
        self,
        namespace: str,
        *,
        propagation_policy: str = "Foreground",
    ) -> None:
        """Request deletion of a namespace without waiting for it to finish.

        Args:
            namespace: Namespace to delete
            propagation_policy: Kubernetes deletion propagation policy

        Raises:
            Exception: If the API rejects the request
        """
        ...

    # =========================================================================
    # Workload Controller Operations
    # =========================================================================

    @abstractmethod
    async def list_resource_names(self, kind: str, namespace: str) -> list[str]:
        """List the names of all resources of a kind in a namespace.

        Args:
            kind: Resource kind ("deployment" or "statefulset")
            namespace: Kubernetes namespace

        Returns:
            Resource names

        Raises:
            Exception: If the listing fails
        """
        ...

    @abstractmethod
    async def delete_resource(
        self,
        kind: str,
        name: str,
        namespace: str,
        *,
        propagation_policy: str = "Foreground",
    ) -> None:
        """Delete a single namespaced resource.

        Args:
            kind: Resource kind ("deployment" or "statefulset")
            name: Resource name
            namespace: Kubernetes namespace
            propagation_policy: Kubernetes deletion propagation policy

        Raises:
            Exception: If the deletion fails
        """
        ...
