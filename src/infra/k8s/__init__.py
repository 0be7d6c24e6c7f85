"""Kubernetes infrastructure abstraction layer.

This module provides a small abstraction over the Kubernetes operations
needed to tear down releases, backed by the kr8s library.

Example:
    from src.infra.k8s import get_k8s_controller, run_sync

    controller = get_k8s_controller()
    deployments = run_sync(controller.list_resource_names("deployment", "my-namespace"))
"""

from .controller import KubernetesController, NamespaceInfo, WatchEvent
from .helpers import get_k8s_controller
from .utils import join_all, run_sync

__all__ = [
    # Controller classes
    "KubernetesController",
    # Data classes
    "NamespaceInfo",
    "WatchEvent",
    # Utilities
    "get_k8s_controller",
    "join_all",
    "run_sync",
]
