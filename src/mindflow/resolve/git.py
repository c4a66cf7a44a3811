"""Git-aware file listing.

All git calls use shell=False. A missing git binary is treated the same as
"not inside a repository" so plain directories still resolve without git.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from loguru import logger


class GitListError(RuntimeError):
    """``git ls-files`` failed inside a detected work tree."""


def is_within_git_repo(path: Path) -> bool:
    """Return True if directory *path* lies inside a git work tree."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            cwd=path,
            shell=False,
            capture_output=True,
            text=True,
        )
    except (FileNotFoundError, NotADirectoryError, PermissionError) as exc:
        logger.debug("git unavailable for {}: {}", path, exc)
        return False
    return result.returncode == 0 and result.stdout.strip() == "true"


def get_git_files(path: Path) -> list[str]:
    """List files under directory *path* that git knows about.

    Tracked files plus untracked files not excluded by ``.gitignore``,
    joined onto *path*. Entries that are not regular files on disk
    (deleted files, submodule checkouts) are dropped.

    Raises:
        GitListError: If ``git ls-files`` fails.
    """
    try:
        result = subprocess.run(
            ["git", "ls-files", "-z", "--cached", "--others", "--exclude-standard"],
            cwd=path,
            shell=False,
            capture_output=True,
            encoding="utf-8",
            errors="surrogateescape",
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        raise GitListError(f"git ls-files failed in {path}: {exc.stderr.strip()}") from None

    files: list[str] = []
    for rel in dict.fromkeys(result.stdout.split("\0")):
        if not rel:
            continue
        candidate = path / rel
        if candidate.is_file():
            files.append(str(candidate))
        else:
            logger.debug("Skipping non-file git entry: {}", candidate)
    return files
