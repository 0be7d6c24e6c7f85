"""Shell command abstractions for Helm and lifecycle hook execution.

This package provides a small, documented interface for the shell commands
used during deployment and purge:

- runner: generic subprocess execution (argv, ``sh -c`` and streaming)
- helm: Helm release management

Usage:
    from src.cli.deployment.shell_commands import ShellCommands

    commands = ShellCommands()
    release = commands.helm.status("my-release")
"""

from pathlib import Path

from .helm import HelmCommands
from .runner import CommandRunner
from .types import CommandResult, HelmRelease


class ShellCommands:
    """Unified interface for all shell command operations.

    Attributes:
        runner: Low-level command runner (hooks and shell expressions)
        helm: Helm-related commands

    Example:
        >>> commands = ShellCommands(Path("."))
        >>> commands.helm.upgrade_install("my-release", "./chart", "default")
    """

    def __init__(self, working_dir: Path | None = None) -> None:
        """Initialize the shell commands executor.

        Args:
            working_dir: Directory commands are executed from by default.
        """
        self._working_dir = Path(working_dir) if working_dir else None
        self.runner = CommandRunner(self._working_dir)
        self.helm = HelmCommands(self.runner)

    @property
    def working_dir(self) -> Path | None:
        """Get the working directory commands run from."""
        return self._working_dir


__all__ = [
    "ShellCommands",
    "CommandResult",
    "HelmRelease",
    "HelmCommands",
    "CommandRunner",
]
