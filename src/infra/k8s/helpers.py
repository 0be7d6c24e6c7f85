from __future__ import annotations

from cachetools.func import lru_cache  # type: ignore

from src.infra.k8s.controller import KubernetesController


@lru_cache(maxsize=4)
def get_k8s_controller(kubeconfig: str | None = None) -> KubernetesController:
    """Get the KubernetesController for a kubeconfig.

    One controller is kept per kubeconfig path.

    Args:
        kubeconfig: Optional kubeconfig path, defaults to kr8s discovery

    Returns:
        An instance of KubernetesController
    """
    from src.infra.k8s.kr8s_controller import Kr8sController

    return Kr8sController(kubeconfig)
