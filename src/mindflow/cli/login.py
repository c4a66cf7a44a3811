"""mindflow login / logout — manage the authorization token.

The token is written verbatim to ~/.mindflow and used to authenticate
subsequent requests to the Mindflow server.

Usage:
  mindflow login <token>
  mindflow login            (prompts for the token)
  mindflow logout
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from mindflow.auth import HomeNotFoundError, TokenWriteError, clear_token, save_token, token_path
from mindflow.cli.errors import err_empty_token, err_no_home, err_token_remove, err_token_write

console = Console()


def login_cmd(
    token: Annotated[
        str | None,
        typer.Argument(help="Authorization token. Prompted for when omitted."),
    ] = None,
) -> None:
    """Set the authorization token used to authenticate with the Mindflow server."""
    # HOME is checked first so nothing is prompted or written without it.
    _require_token_path()

    if token is None:
        token = typer.prompt("Authorization token")

    if not token.strip():
        console.print(err_empty_token())
        raise typer.Exit(1)

    try:
        save_token(token)
    except TokenWriteError as exc:
        console.print(err_token_write(str(exc.path), exc.reason))
        raise typer.Exit(1)

    console.print("[green]✓[/] Successfully authorized with token")


def logout_cmd() -> None:
    """Remove the stored authorization token."""
    path = _require_token_path()
    try:
        removed = clear_token()
    except TokenWriteError as exc:
        console.print(err_token_remove(str(exc.path), exc.reason))
        raise typer.Exit(1)

    if removed:
        console.print(f"[green]✓[/] Removed token: {path}")
    else:
        console.print("[dim]No stored token — nothing to remove.[/]")


def _require_token_path() -> Path:
    try:
        return token_path()
    except HomeNotFoundError:
        console.print(err_no_home())
        raise typer.Exit(1)
