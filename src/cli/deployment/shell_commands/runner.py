"""Command runner for executing shell commands.

This module provides the base command execution functionality used by
the Helm wrapper, the lifecycle hook runner and the shell evaluator.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from .types import CommandResult


class CommandRunner:
    """Low-level command executor with consistent result handling.

    This class provides the foundation for executing shell commands with
    proper output capture, error handling, and streaming support.
    """

    def __init__(self, working_dir: Path | None = None) -> None:
        """Initialize the command runner.

        Args:
            working_dir: Directory commands are executed from by default.
                         Falls back to the current working directory.
        """
        self.working_dir = working_dir

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        capture_output: bool = True,
        check: bool = False,
    ) -> CommandResult:
        """Execute a command and return structured result.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to working_dir)
            capture_output: Whether to capture stdout/stderr
            check: Whether to raise exception on non-zero exit code

        Returns:
            CommandResult with success status, output, and return code

        Raises:
            subprocess.CalledProcessError: If check=True and command fails
        """
        result = subprocess.run(
            list(cmd),
            cwd=cwd or self.working_dir,
            capture_output=capture_output,
            text=True,
            check=check,
        )
        return CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )

    def run_shell(self, command: str, *, cwd: Path | None = None) -> CommandResult:
        """Execute a command line through ``sh -c`` and capture its output.

        Args:
            command: Shell command line
            cwd: Working directory (defaults to working_dir)

        Returns:
            CommandResult with captured stdout and stderr
        """
        return self.run(["sh", "-c", command], cwd=cwd)

    def run_streaming(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Execute a command with real-time output streaming.

        This method runs a command and calls the on_output callback for each
        line of output, allowing real-time progress display.

        Args:
            cmd: Command and arguments as a sequence
            cwd: Working directory (defaults to working_dir)
            on_output: Callback function called with each line of output.
                      If None, output is collected but not streamed.

        Returns:
            CommandResult with success status, collected output, and return code
        """
        env = os.environ.copy()
        env["PYTHONUNBUFFERED"] = "1"

        process = subprocess.Popen(
            list(cmd),
            cwd=cwd or self.working_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,  # Merge stderr into stdout
            text=True,
            bufsize=0,
            env=env,
        )

        stdout_lines: list[str] = []

        if process.stdout:
            for line in iter(process.stdout.readline, ""):
                line = line.rstrip("\n")
                if line:
                    stdout_lines.append(line)
                    if on_output:
                        on_output(line)

        process.wait()

        return CommandResult(
            success=process.returncode == 0,
            stdout="\n".join(stdout_lines),
            stderr="",  # stderr is merged into stdout
            returncode=process.returncode or 0,
        )
