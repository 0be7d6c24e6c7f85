"""Multi-release deployer driven by a configuration file.

This module provides the ReleaseDeployer class which installs or upgrades
every release of a configuration in declared order:

1. Run the global ``before`` hooks
2. For each release:
   a. Evaluate shell expressions in its overrides
   b. Run the release ``before`` hooks
   c. Write the overrides to a temporary values file
   d. ``helm upgrade --install`` the chart
   e. Print a status message with the release notes
   f. Run the release ``after`` hooks
3. Run the global ``after`` hooks

The first failure aborts the run. Releases that were already deployed are
left as they are.
"""

from __future__ import annotations

import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger
from rich.panel import Panel
from rich.text import Text

from src.runtime.config.config_loader import dump_overrides, load_config
from src.runtime.config.config_node import ConfigNode
from src.runtime.config.config_utils import ShellEvaluator, template_structure
from src.utils.console_like import ConsoleLike, coalesce_console
from src.utils.errors import (
    ConfigParseError,
    ConfigReadError,
    HookExecutionError,
    MaterializationError,
    PhaseError,
    TemplatingError,
)

from ..constants import DeploymentConstants
from .hooks import HookRunner

if TYPE_CHECKING:
    from loguru import Logger

    from src.runtime.config.config_data import Config, ReleaseSpec, Task

    from ..shell_commands import ShellCommands


class ReleaseDeployer:
    """Deploys the releases of a configuration in order.

    Attributes:
        commands: Shell command executor (Helm and hook runner)
        console: Console for progress and status output
        evaluator: Shell expression evaluator used on override trees
        hooks: Lifecycle hook runner
        constants: Deployment constants
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: ConsoleLike | None = None,
        *,
        evaluator: ShellEvaluator | None = None,
        constants: DeploymentConstants | None = None,
        log: Logger | None = None,
    ) -> None:
        """Initialize the deployer.

        Args:
            commands: Shell command executor
            console: Console for output
            evaluator: Shell expression evaluator, defaults to one running
                       commands through ``commands.runner``
            constants: Optional deployment constants
            log: Logger, defaults to one bound to the ``deploy`` component
        """
        self.commands = commands
        self.console = coalesce_console(console)
        self.constants = constants or DeploymentConstants()
        self.log = log or logger.bind(component="deploy")
        self.evaluator = evaluator or ShellEvaluator(commands.runner.run_shell)
        self.hooks = HookRunner(commands.runner, self.console, self.log)

    # =========================================================================
    # Public Interface
    # =========================================================================

    def deploy_from_file(
        self, config_path: Path, timeout_minutes: int | None = None
    ) -> None:
        """Load a configuration file and deploy it.

        Args:
            config_path: Path to the YAML configuration file
            timeout_minutes: Helm timeout per release

        Raises:
            PhaseError: If loading or any deployment step fails
        """
        try:
            config = load_config(config_path)
        except ConfigReadError as e:
            raise PhaseError("unable to read configuration", e) from e
        except ConfigParseError as e:
            raise PhaseError("failed to unmarshal configuration", e) from e

        self.deploy(config, timeout_minutes)

    def deploy(self, config: Config, timeout_minutes: int | None = None) -> None:
        """Deploy every release of a configuration.

        Args:
            config: Loaded configuration
            timeout_minutes: Helm timeout per release

        Raises:
            PhaseError: On the first failing step
        """
        timeout_minutes = timeout_minutes or self.constants.DEFAULT_DEPLOY_TIMEOUT_MINUTES

        self._run_hooks(
            self.constants.PRE_DEPLOYMENT_PHASE,
            config.before,
            "failed to evaluate predeployment steps",
        )

        for release in config.releases:
            self.deploy_release(release, timeout_minutes)

        self._run_hooks(
            self.constants.POST_DEPLOYMENT_PHASE,
            config.after,
            "failed to evaluate postdeployment steps",
        )

        self.console.print(
            f"\n[bold green]🎉 Deployed {len(config.releases)} release(s)[/bold green]"
        )

    def deploy_release(self, release: ReleaseSpec, timeout_minutes: int) -> None:
        """Template, hook and install a single release.

        Args:
            release: Release to deploy
            timeout_minutes: Helm timeout

        Raises:
            PhaseError: If any step fails
        """
        try:
            overrides = template_structure(release.overrides, self.evaluator)
        except TemplatingError as e:
            raise PhaseError("failed to process overrides section", e) from e

        self._run_hooks(
            f"Before Chart {release.chart_name}",
            release.before,
            "failed to evaluate before release steps",
        )

        try:
            self._install(release, overrides, timeout_minutes)
        except MaterializationError as e:
            raise PhaseError("failed to deploy release", e) from e

        self._show_release_status(release)

        self._run_hooks(
            f"After Chart {release.chart_name}",
            release.after,
            "failed to evaluate after release steps",
        )

    # =========================================================================
    # Private Helpers
    # =========================================================================

    def _run_hooks(self, phase: str, tasks: Sequence[Task], failure: str) -> None:
        try:
            self.hooks.run(phase, tasks)
        except HookExecutionError as e:
            raise PhaseError(failure, e) from e

    def _install(
        self, release: ReleaseSpec, overrides: ConfigNode, timeout_minutes: int
    ) -> None:
        """Run helm upgrade --install with the templated overrides.

        Raises:
            MaterializationError: If helm fails or cannot be executed
        """
        values_file = self._write_values_file(overrides)
        try:
            with self.console.status(
                f"[cyan]Creating Helm Release for {release.chart_name}...[/cyan]"
            ):
                result = self.commands.helm.upgrade_install(
                    release.chart_name,
                    release.chart_location,
                    release.chart_namespace,
                    value_files=[values_file],
                    timeout=self.constants.deploy_timeout(timeout_minutes),
                )
        except OSError as e:
            raise MaterializationError("helm could not be executed", details=str(e)) from e
        finally:
            values_file.unlink(missing_ok=True)

        if not result.success:
            raise MaterializationError(
                f"helm upgrade --install failed for release {release.chart_name}",
                details=(result.stderr or result.stdout).strip() or None,
            )

    def _write_values_file(self, overrides: ConfigNode) -> Path:
        """Write templated overrides to a temporary values file."""
        with tempfile.NamedTemporaryFile(
            "w", suffix=".yaml", prefix="chartwright-values-", delete=False
        ) as f:
            f.write(dump_overrides(overrides))
        self.log.debug(f"Wrote values file {f.name}")
        return Path(f.name)

    def _show_release_status(self, release: ReleaseSpec) -> None:
        """Print the success message, with release notes when available."""
        self.console.ok(
            f"Successfully created new helm chart [bold]{release.chart_name}[/bold] "
            f"in namespace [italic]{release.chart_namespace}[/italic]."
        )

        notes = self._fetch_notes(release)
        if notes:
            self.console.print(Panel(Text(notes), title="Release Notes", border_style="dim"))

    def _fetch_notes(self, release: ReleaseSpec) -> str | None:
        """Fetch release notes. Failures are logged and otherwise ignored."""
        try:
            result = self.commands.helm.get_notes(
                release.chart_name, release.chart_namespace
            )
        except OSError as e:
            self.log.warning(f"Could not fetch notes of {release.chart_name}: {e}")
            return None

        if not result.success:
            self.log.warning(
                f"Could not fetch notes of {release.chart_name}: {result.stderr.strip()}"
            )
            return None
        return result.stdout.strip() or None
