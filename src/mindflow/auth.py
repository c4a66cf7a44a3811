"""Authorization token storage.

The token used to authenticate with the Mindflow server is kept verbatim in a
single dotfile, ``$HOME/.mindflow``, overwritten by every ``mindflow login``.
The file is created owner-readable only (mode 0o600).

Only the ``HOME`` environment variable is consulted; there is no fallback to
the password database, so a missing ``HOME`` is an error.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from loguru import logger

TOKEN_FILE_NAME = ".mindflow"


class AuthError(RuntimeError):
    """Base class for token storage failures."""


class HomeNotFoundError(AuthError):
    """``HOME`` is not set in the environment."""


class TokenWriteError(AuthError):
    """The token file could not be written or removed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def token_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the token file location derived from ``HOME``.

    Raises:
        HomeNotFoundError: If ``HOME`` is unset or empty.
    """
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    if not home:
        raise HomeNotFoundError("environment variable 'HOME' is not set")
    return Path(home) / TOKEN_FILE_NAME


def save_token(token: str, environ: Mapping[str, str] | None = None) -> Path:
    """Write *token* byte-for-byte to the token file and return its path.

    ``HOME`` is resolved before anything touches the filesystem.

    Raises:
        HomeNotFoundError: If ``HOME`` is unset.
        TokenWriteError: If the file cannot be written.
    """
    path = token_path(environ)
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as fh:
            # An existing file keeps its old mode through O_CREAT; tighten it first.
            os.fchmod(fh.fileno(), 0o600)
            fh.write(token.encode("utf-8"))
    except OSError as exc:
        raise TokenWriteError(path, exc.strerror or str(exc)) from exc
    logger.debug("Stored token in {}", path)
    return path


def load_token(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the stored token, or ``None`` if no token file exists."""
    path = token_path(environ)
    try:
        return path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        return None


def clear_token(environ: Mapping[str, str] | None = None) -> bool:
    """Delete the token file. Returns False if there was nothing to delete."""
    path = token_path(environ)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise TokenWriteError(path, exc.strerror or str(exc)) from exc
    logger.debug("Removed token file {}", path)
    return True
