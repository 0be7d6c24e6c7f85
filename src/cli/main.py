"""Main CLI application module.

This module provides the main entry point for the chartwright CLI.

Commands:
- deploy: Install or upgrade the releases of a configuration file
- render: Print a configuration with its shell expressions evaluated
- purge: Delete releases together with their namespaces
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from src.utils.log_setup import configure_logging

from .commands import deploy, purge, render
from .context import build_cli_context

# Create the main CLI application
app = typer.Typer(
    help="⎈  chartwright - Helm release orchestration",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def setup(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
    kubeconfig: Annotated[
        Path | None,
        typer.Option(
            "--kubeconfig",
            envvar="KUBECONFIG",
            help="Kubernetes configuration file used by helm and the API client",
        ),
    ] = None,
) -> None:
    """Set up logging and cluster access for every command."""
    configure_logging(verbose)

    kubeconfig_path = str(kubeconfig) if kubeconfig is not None else None
    if kubeconfig_path:
        # helm reads the same file
        os.environ["KUBECONFIG"] = kubeconfig_path

    if ctx.obj is None:
        ctx.obj = build_cli_context(kubeconfig_path)


app.command(name="deploy")(deploy)
app.command(name="render")(render)
app.command(name="purge")(purge)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
