"""Mindflow CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from mindflow.cli.login import login_cmd, logout_cmd
from mindflow.cli.resolve import resolve_cmd
from mindflow.config import ConfigError, load_config
from mindflow.log import configure_logging


def _installed_version() -> str:
    try:
        return importlib.metadata.version("mindflow")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"mindflow {_installed_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="mindflow",
    help=(
        "Mindflow — authorize with the Mindflow server and prepare local files as references.\n\n"
        "  mindflow login     Store the authorization token in ~/.mindflow.\n"
        "  mindflow resolve   Hash files and directories into references."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """Mindflow — authorize with the Mindflow server and prepare local files as references."""
    # Config errors are reported by the commands that read config; login,
    # logout and version must keep working with a broken mindflow.yaml.
    try:
        cfg = load_config()
    except ConfigError:
        cfg = None
    ctx.obj = cfg

    if verbose:
        configure_logging("DEBUG")
    else:
        configure_logging(cfg.logging.level if cfg else "WARNING")


app.command("login")(login_cmd)
app.command("logout")(logout_cmd)
app.command("resolve")(resolve_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed Mindflow version."""
    typer.echo(f"mindflow {_installed_version()}")


if __name__ == "__main__":
    app()
