"""Data types for shell command results.

This module contains the dataclasses shared by the command runner and
the Helm command wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "CommandResult",
    "HelmRelease",
]


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0


@dataclass
class HelmRelease:
    """Information about a Helm release.

    Attributes:
        name: Release name
        namespace: Kubernetes namespace
        status: Release status (deployed, failed, pending, uninstalling)
        revision: Release revision number
    """

    name: str
    namespace: str
    status: str
    revision: str
