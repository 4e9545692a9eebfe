"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from release_view.config.settings import settings

app = typer.Typer(
    name="rview",
    help="Release View - Helm releases, their updates and their resources.",
    no_args_is_help=True,
)


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    level = logging.DEBUG if verbose else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
    )


def _register_commands() -> None:
    from release_view.cli.commands.delete_cmd import delete
    from release_view.cli.commands.deploy_cmd import deploy, upgrade
    from release_view.cli.commands.list_cmd import list_releases
    from release_view.cli.commands.resources_cmd import resources

    # Plain commands rather than sub-apps so options may follow arguments
    app.command("list", help="List releases with update info")(list_releases)
    app.command("resources", help="Show a release, its update info and its resources")(resources)
    app.command("delete", help="Delete a release")(delete)
    app.command("deploy", help="Deploy a chart")(deploy)
    app.command("upgrade", help="Upgrade a release")(upgrade)


_register_commands()


def main() -> None:
    app()
