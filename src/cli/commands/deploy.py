"""Deployment commands.

This module provides the ``deploy`` command, which installs or upgrades
every release of a configuration file, and the ``render`` command, which
shows the configuration with its shell expressions evaluated.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.syntax import Syntax

from src.cli.context import get_cli_context
from src.cli.deployment.release_deployer import ReleaseDeployer
from src.cli.shared.console import with_error_handling
from src.runtime.config.config_loader import dump_config, load_config
from src.runtime.config.config_utils import ShellEvaluator, render_config
from src.utils.errors import (
    ConfigParseError,
    ConfigReadError,
    PhaseError,
    TemplatingError,
)

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        envvar="DEPLOYMENT_CONFIG",
        help="Deployment configuration file",
        dir_okay=False,
    ),
]


@with_error_handling
def deploy(
    ctx: typer.Context,
    config: ConfigOption = None,
    timeout: Annotated[
        int,
        typer.Option(
            "--timeout",
            "-t",
            envvar="DEPLOYMENT_TIMEOUT",
            min=1,
            help="Helm timeout per release, in minutes",
        ),
    ] = 40,
) -> None:
    """Deploy every release of a configuration file to Kubernetes.

    Releases are installed in the order they are listed. The run stops at
    the first failing step; releases deployed before it are kept.
    """
    if config is None:
        typer.echo(ctx.get_help())
        return

    cli = get_cli_context(ctx)
    cli.console.print_header(f"Deploying {config.name}")

    deployer = ReleaseDeployer(cli.commands, cli.console, constants=cli.constants)
    deployer.deploy_from_file(config, timeout)


@with_error_handling
def render(
    ctx: typer.Context,
    config: ConfigOption = None,
) -> None:
    """Print a configuration file with its shell expressions evaluated.

    Nothing is deployed and no hooks run. Embedded commands in the
    overrides are executed, though.
    """
    if config is None:
        typer.echo(ctx.get_help())
        return

    cli = get_cli_context(ctx)

    try:
        loaded = load_config(config)
    except ConfigReadError as e:
        raise PhaseError("unable to read configuration", e) from e
    except ConfigParseError as e:
        raise PhaseError("failed to unmarshal configuration", e) from e

    try:
        rendered = render_config(loaded, ShellEvaluator(cli.commands.runner.run_shell))
    except TemplatingError as e:
        raise PhaseError("failed to process overrides section", e) from e

    cli.console.print(Syntax(dump_config(rendered), "yaml", background_color="default"))
