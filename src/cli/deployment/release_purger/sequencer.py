"""Teardown of a single Helm release.

The release's workload controllers are deleted first, one kind after the
other, so their pods go away in a predictable order. Then the namespace and
the Helm release record are removed concurrently.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from loguru import logger

from src.infra.k8s.utils import join_all
from src.utils.errors import MaterializationError, ResourceDeletionError

from ..constants import DeploymentConstants
from .namespace import NamespaceTerminator

if TYPE_CHECKING:
    from loguru import Logger

    from src.infra.k8s.controller import KubernetesController

    from ..shell_commands import HelmCommands


class ReleasePurgeSequencer:
    """Purges one release: controllers, then namespace and release record.

    Attributes:
        helm: Helm command wrapper
        controller: Kubernetes controller
        terminator: Namespace terminator
        constants: Deployment constants
    """

    def __init__(
        self,
        helm: HelmCommands,
        controller: KubernetesController,
        *,
        terminator: NamespaceTerminator | None = None,
        constants: DeploymentConstants | None = None,
        log: Logger | None = None,
    ) -> None:
        self.helm = helm
        self.controller = controller
        self.constants = constants or DeploymentConstants()
        self.log = log or logger.bind(component="purge")
        self.terminator = terminator or NamespaceTerminator(
            controller, self.constants, self.log
        )

    async def purge(self, release_name: str) -> None:
        """Remove a release, its workload controllers and its namespace.

        Args:
            release_name: Helm release name

        Raises:
            MaterializationError: If the release cannot be looked up or uninstalled
            ResourceDeletionError: If a controller or the namespace cannot be deleted
            NamespaceWatchError: If the namespace watch reports an error
        """
        release = await asyncio.to_thread(self.helm.status, release_name)
        namespace = release.namespace
        self.log.info(f"Purging release {release_name} in namespace {namespace}")

        for kind in self.constants.CONTROLLER_KINDS:
            await self.purge_controllers(kind, namespace)

        errors = await join_all(
            [
                self.terminator.terminate(namespace),
                self.delete_release(release_name, namespace),
            ]
        )
        if errors:
            for extra in errors[1:]:
                self.log.error(f"Purging {release_name}: {extra}")
            raise errors[0]

        self.log.info(f"Release {release_name} purged")

    async def purge_controllers(self, kind: str, namespace: str) -> None:
        """Delete every resource of a controller kind in a namespace.

        A failed listing counts as "none of this kind". A failed deletion
        stops the purge.

        Raises:
            ResourceDeletionError: If a resource cannot be deleted
        """
        try:
            names = await self.controller.list_resource_names(kind, namespace)
        except Exception as e:
            self.log.debug(f"Listing {kind}s in {namespace} failed, skipping: {e}")
            return

        for name in names:
            self.log.debug(f"Deleting {kind} {namespace}/{name}")
            try:
                await self.controller.delete_resource(
                    kind,
                    name,
                    namespace,
                    propagation_policy=self.constants.PROPAGATION_POLICY,
                )
            except Exception as e:
                raise ResourceDeletionError(
                    f"failed to delete {kind} {namespace}/{name}", details=str(e)
                ) from e

    async def delete_release(self, release_name: str, namespace: str) -> None:
        """Uninstall the Helm release without keeping its history.

        Raises:
            MaterializationError: If helm fails or cannot be executed
        """
        try:
            result = await asyncio.to_thread(
                self.helm.uninstall,
                release_name,
                namespace,
                timeout=self.constants.RELEASE_DELETE_TIMEOUT,
            )
        except OSError as e:
            raise MaterializationError("helm could not be executed", details=str(e)) from e

        if not result.success:
            raise MaterializationError(
                f"failed to delete release {release_name}",
                details=result.stderr.strip() or None,
            )
