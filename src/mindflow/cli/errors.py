"""Mindflow rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from mindflow.cli.errors import err_no_home
    console.print(err_no_home())
    raise typer.Exit(1)
"""

from __future__ import annotations


def err_no_home() -> str:
    """HOME is not set, so the token file location is unknown."""
    return (
        "[red]Error:[/] Unable to find home directory in ENV: 'HOME' is not set.\n"
        "  Set:  export HOME=/path/to/your/home"
    )


def err_token_write(path: str, reason: str) -> str:
    """Token file could not be written."""
    return (
        f"[red]Error:[/] Could not write token to '{path}': {reason}\n"
        "  Check that the file is writable, then run:  mindflow login"
    )


def err_token_remove(path: str, reason: str) -> str:
    """Token file could not be deleted."""
    return (
        f"[red]Error:[/] Could not remove token file '{path}': {reason}\n"
        "  Remove it manually:  rm " + path
    )


def err_empty_token() -> str:
    """An empty authorization token was supplied."""
    return (
        "[red]Error:[/] Authorization token is empty.\n"
        "  Run:  mindflow login <token>"
    )


def err_config(message: str) -> str:
    """Config file failed validation."""
    return (
        f"[red]Error:[/] Invalid configuration.\n"
        f"  {message}\n"
        "  Fix or remove the offending key in mindflow.yaml / ~/.mindflow.yaml."
    )


def err_path_not_found(path: str) -> str:
    """A path passed to resolve does not exist."""
    return (
        f"[yellow]Path not found:[/] '{path}' is neither a file nor a directory — skipping.\n"
        "  Check the path and run:  mindflow resolve <path>"
    )


def err_nothing_to_resolve() -> str:
    """None of the given paths could be resolved."""
    return (
        "[red]Error:[/] No resolvable paths given.\n"
        "  Use:  mindflow resolve <file-or-directory> [...]"
    )


def err_git_failed(message: str) -> str:
    """git listing failed for a repository directory."""
    return (
        f"[red]Error:[/] {message}\n"
        "  Retry without git awareness:  mindflow resolve --no-git <path>"
    )
