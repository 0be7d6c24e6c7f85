"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass

import click
import typer

from src.cli.deployment.constants import DeploymentConstants
from src.cli.deployment.shell_commands import ShellCommands
from src.cli.shared.console import CLIConsole, console
from src.infra.k8s import get_k8s_controller
from src.infra.k8s.controller import KubernetesController


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    commands: ShellCommands
    k8s_controller: KubernetesController
    constants: DeploymentConstants


def build_cli_context(kubeconfig: str | None = None) -> CLIContext:
    """Build a fresh CLIContext.

    Args:
        kubeconfig: Optional kubeconfig path for the Kubernetes controller
    """
    return CLIContext(
        console=console,
        commands=ShellCommands(),
        k8s_controller=get_k8s_controller(kubeconfig),
        constants=DeploymentConstants(),
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context()
