"""Namespace deletion confirmed through a watch stream."""

from __future__ import annotations

from contextlib import aclosing
from typing import TYPE_CHECKING

from loguru import logger

from src.utils.errors import NamespaceWatchError, ResourceDeletionError

from ..constants import DeploymentConstants

if TYPE_CHECKING:
    from loguru import Logger

    from src.infra.k8s.controller import KubernetesController


class NamespaceTerminator:
    """Deletes a namespace and waits until the API server reports it gone."""

    def __init__(
        self,
        controller: KubernetesController,
        constants: DeploymentConstants | None = None,
        log: Logger | None = None,
    ) -> None:
        self.controller = controller
        self.constants = constants or DeploymentConstants()
        self.log = log or logger.bind(component="namespace")

    async def terminate(self, namespace: str) -> None:
        """Delete ``namespace`` and block until a DELETED event arrives.

        There is no client-side timeout; the wait ends only on a DELETED or
        ERROR event, or when the server closes the stream.

        Raises:
            ResourceDeletionError: If the namespace cannot be fetched or deleted
            NamespaceWatchError: On an ERROR event or an early end of the stream
        """
        try:
            ns = await self.controller.get_namespace(namespace)
        except Exception as e:
            raise ResourceDeletionError(
                f"failed to get namespace {namespace}", details=str(e)
            ) from e

        # Anchored at the fetched resource version, so the deletion is seen
        # even though the stream only connects once iteration starts.
        events = self.controller.watch_namespace(ns)

        async with aclosing(events):
            try:
                await self.controller.delete_namespace(
                    namespace, propagation_policy=self.constants.PROPAGATION_POLICY
                )
            except Exception as e:
                raise ResourceDeletionError(
                    f"failed to delete namespace {namespace}", details=str(e)
                ) from e
            self.log.debug(f"Deletion of namespace {namespace} requested, watching")

            try:
                async for event in events:
                    if event.type == self.constants.WATCH_EVENT_DELETED:
                        self.log.info(f"Namespace {namespace} deleted")
                        return
                    if event.type == self.constants.WATCH_EVENT_ERROR:
                        raise NamespaceWatchError(f"failed to delete namespace {namespace}")
                    self.log.debug(f"Ignoring {event.type} event for namespace {namespace}")
            except NamespaceWatchError:
                raise
            except Exception as e:
                raise NamespaceWatchError(
                    f"watch on namespace {namespace} failed", details=str(e)
                ) from e

        raise NamespaceWatchError(
            f"watch on namespace {namespace} ended before it was deleted"
        )
