"""Lifecycle hook execution.

Hooks are the ``before``/``after`` task lists of the configuration file.
They run one after another, never concurrently, and the first failing
task stops the list.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from loguru import logger
from rich.markup import escape

from src.utils.console_like import ConsoleLike, coalesce_console
from src.utils.errors import HookExecutionError

if TYPE_CHECKING:
    from loguru import Logger

    from src.runtime.config.config_data import Task

    from ..shell_commands import CommandRunner


class HookRunner:
    """Runs hook task lists through a CommandRunner."""

    def __init__(
        self,
        runner: CommandRunner,
        console: ConsoleLike | None = None,
        log: Logger | None = None,
    ) -> None:
        """Initialize the hook runner.

        Args:
            runner: Command runner used to execute tasks
            console: Console for progress output
            log: Logger, defaults to one bound to the ``hooks`` component
        """
        self.runner = runner
        self.console = coalesce_console(console)
        self.log = log or logger.bind(component="hooks")

    def run(self, phase: str, tasks: Sequence[Task]) -> None:
        """Run every task of a phase in order.

        Args:
            phase: Human-readable label, e.g. "Predeployment Steps"
            tasks: Tasks to run

        Raises:
            HookExecutionError: If a task exits with a non-zero status
        """
        if not tasks:
            self.log.debug(f"No tasks for {phase}")
            return

        self.console.print(f"[bold cyan]{phase}[/bold cyan]")

        for task in tasks:
            self.console.info(task.name)
            self.log.debug(f"{phase}: running {task.name}: {task.argv}")

            try:
                result = self.runner.run_streaming(
                    task.argv,
                    on_output=lambda line: self.console.print(f"  [dim]{escape(line)}[/dim]"),
                )
            except OSError as e:
                raise HookExecutionError(
                    f"task '{task.name}' could not be started", details=str(e)
                ) from e
            if not result.success:
                raise HookExecutionError(
                    f"task '{task.name}' failed with exit code {result.returncode}",
                    details=result.stdout or None,
                )
