"""Purging of several Helm releases at once.

Only releases that actually exist are purged. The operator confirms the
whole set once; the releases are then torn down concurrently, each one
independently of the others.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from src.infra.k8s.utils import join_all
from src.utils.console_like import ConsoleLike, coalesce_console
from src.utils.errors import PhaseError

from ..constants import DeploymentConstants
from .sequencer import ReleasePurgeSequencer

if TYPE_CHECKING:
    from loguru import Logger

    from src.infra.k8s.controller import KubernetesController

    from ..shell_commands import HelmCommands


@dataclass
class PurgeOutcome:
    """Result of purging one release."""

    release: str
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class ReleasePurger:
    """Purges Helm releases together with their namespaces.

    A failure in one release does not stop or roll back the others: every
    started purge runs to completion and the first failure is reported
    afterwards.

    Attributes:
        helm: Helm command wrapper
        sequencer: Per-release purge sequencer
        confirm: Callback asked once with the releases about to be purged
        console: Console for progress output
    """

    def __init__(
        self,
        helm: HelmCommands,
        controller: KubernetesController,
        confirm: Callable[[list[str]], bool],
        console: ConsoleLike | None = None,
        *,
        sequencer: ReleasePurgeSequencer | None = None,
        constants: DeploymentConstants | None = None,
        log: Logger | None = None,
    ) -> None:
        """Initialize the purger.

        Args:
            helm: Helm command wrapper, shared by all purge tasks
            controller: Kubernetes controller, shared by all purge tasks
            confirm: Returns True if the operator agrees to purge the given releases
            console: Console for output
            sequencer: Per-release sequencer, built from helm and controller if omitted
            constants: Optional deployment constants
            log: Logger, defaults to one bound to the ``purge`` component
        """
        self.helm = helm
        self.confirm = confirm
        self.console = coalesce_console(console)
        self.constants = constants or DeploymentConstants()
        self.log = log or logger.bind(component="purge")
        self.sequencer = sequencer or ReleasePurgeSequencer(
            helm, controller, constants=self.constants, log=self.log
        )

    async def purge(self, release_names: Sequence[str]) -> list[str]:
        """Purge the given releases after confirmation.

        Args:
            release_names: Requested release names; unknown ones are skipped

        Returns:
            The releases that were purged. Empty if none exist or the
            operator declined.

        Raises:
            PhaseError: Wrapping the first purge failure, once all purges finished
        """
        existing = await self.existing_releases(release_names)
        if not existing:
            self.console.warn("None of the requested releases exist.")
            return []

        if not self.confirm(existing):
            self.console.print("[dim]Purge cancelled.[/dim]")
            return []

        with self.console.status(
            f"[bold red]Purging {len(existing)} release(s)...[/bold red]"
        ):
            outcomes = await self.purge_all(existing)

        for outcome in outcomes:
            if outcome.success:
                self.console.ok(f"Release [bold]{outcome.release}[/bold] purged")
            else:
                self.console.error(f"Release [bold]{outcome.release}[/bold]: {outcome.error}")

        errors = [outcome.error for outcome in outcomes if outcome.error is not None]
        if errors:
            for extra in errors[1:]:
                self.log.error(f"Additional purge failure: {extra}")
            raise PhaseError("failed to purge helm releases", errors[0]) from errors[0]

        return existing

    async def existing_releases(self, release_names: Sequence[str]) -> list[str]:
        """Filter the requested names down to releases present in the cluster."""
        existing: list[str] = []
        for name in dict.fromkeys(release_names):
            try:
                release = await asyncio.to_thread(self.helm.status, name)
            except Exception as e:
                self.log.info(f"Skipping release {name}, it does not exist: {e}")
                continue
            existing.append(release.name)
        return existing

    async def purge_all(self, release_names: list[str]) -> list[PurgeOutcome]:
        """Purge releases concurrently and wait for every one of them.

        Returns:
            One outcome per release, in completion order
        """
        outcomes: list[PurgeOutcome] = []

        async def purge_one(name: str) -> None:
            try:
                await self.sequencer.purge(name)
            except Exception as e:
                outcomes.append(PurgeOutcome(name, e))
                raise
            outcomes.append(PurgeOutcome(name))

        await join_all(purge_one(name) for name in release_names)
        return outcomes
