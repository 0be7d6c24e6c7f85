"""Release purge command."""

from typing import Annotated

import typer

from src.cli.context import get_cli_context
from src.cli.deployment.release_purger import ReleasePurger
from src.cli.shared.console import with_error_handling
from src.infra.k8s import run_sync


@with_error_handling
def purge(
    ctx: typer.Context,
    releases: Annotated[
        list[str],
        typer.Argument(help="Names of the Helm releases to purge", show_default=False),
    ],
) -> None:
    """Delete Helm releases together with their namespaces.

    Deployments and StatefulSets of each release are deleted first, then
    the namespace and the release itself. Releases that do not exist are
    skipped. Nothing is deleted unless you type 'yes' at the prompt.
    """
    cli = get_cli_context(ctx)
    word = cli.constants.CONFIRMATION_WORD

    def confirm(existing: list[str]) -> bool:
        return cli.console.confirm_action(
            f"Purge {len(existing)} Helm release(s)",
            details="\n".join(f"  • [bold]{name}[/bold]" for name in existing),
            extra_warning="Each release's namespace and everything in it will be deleted.",
            confirmation_word=word,
        )

    purger = ReleasePurger(
        cli.commands.helm,
        cli.k8s_controller,
        confirm,
        cli.console,
        constants=cli.constants,
    )
    purged = run_sync(purger.purge(releases))

    if purged:
        cli.console.print(
            f"\n[bold green]🎉 Purged {len(purged)} release(s)[/bold green]"
        )
