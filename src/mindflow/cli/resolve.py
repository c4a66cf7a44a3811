"""mindflow resolve — turn local paths into file References.

Path handling:
  file                 → one reference
  directory in git     → one reference per file from git ls-files (.gitignore honoured)
  other directory      → one reference per file, recursive walk
  missing path         → reported and skipped

Non-UTF-8 and unreadable files are skipped (debug log) without aborting
the rest of the run.

Usage:
  mindflow resolve src/ README.md
  mindflow resolve . --json
  mindflow resolve . --no-git --exclude '*.lock'
"""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from mindflow.cli.errors import err_config, err_git_failed, err_nothing_to_resolve, err_path_not_found
from mindflow.config import ConfigError, MindflowConfig, load_config
from mindflow.resolve import GitListError, PathResolver, ResolveResult, resolve_references

console = Console()

_HASH_PREVIEW = 12


def resolve_cmd(
    ctx: typer.Context,
    paths: Annotated[
        list[str],
        typer.Argument(help="Files or directories to resolve."),
    ],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print references as a JSON array."),
    ] = False,
    no_git: Annotated[
        bool,
        typer.Option("--no-git", help="Walk directories directly instead of using git ls-files."),
    ] = False,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", help="Glob pattern to exclude (repeatable)."),
    ] = None,
) -> None:
    """Resolve files and directories into content-hashed references."""
    # The entry callback stores the config it loaded; reload to report errors.
    cfg = ctx.obj if isinstance(ctx.obj, MindflowConfig) else None
    try:
        cfg = cfg or load_config()
    except ConfigError as exc:
        console.print(err_config(str(exc)))
        raise typer.Exit(1)

    resolver = PathResolver(
        respect_git=cfg.resolve.respect_git and not no_git,
        exclude=cfg.resolve.exclude + list(exclude or []),
        max_depth=cfg.resolve.max_depth,
    )

    # In JSON mode stdout carries only the array; diagnostics go to stderr.
    msg_console = Console(stderr=True) if as_json else console

    valid: list[str] = []
    for path in paths:
        if resolver.should_resolve(path):
            valid.append(path)
        else:
            msg_console.print(err_path_not_found(path))

    if not valid:
        msg_console.print(err_nothing_to_resolve())
        raise typer.Exit(1)

    try:
        if as_json:
            result = resolve_references(valid, resolver)
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                transient=True,
                console=console,
            ) as prog:
                prog.add_task(f"Resolving {len(valid)} path(s)…", total=None)
                result = resolve_references(valid, resolver)
    except GitListError as exc:
        msg_console.print(err_git_failed(str(exc)))
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in result.references], indent=2))
        return

    _print_table(result)


def _print_table(result: ResolveResult) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Path", overflow="fold")
    table.add_column("Size", justify="right", no_wrap=True)
    table.add_column("SHA-256", no_wrap=True)
    for ref in result.references:
        table.add_row(ref.path, f"{ref.size_bytes:,}", ref.content_hash[:_HASH_PREVIEW])
    console.print(table)

    console.print(
        f"[green]✓[/] {len(result.references)} reference(s) · {result.total_bytes:,} bytes"
    )
    if result.skipped:
        console.print(
            f"[yellow]↷ Skipped {len(result.skipped)} file(s)[/] "
            "[dim](unreadable or not UTF-8; run with --verbose for details)[/]"
        )
