"""File path resolver — local files and directories to file References.

Directory expansion:
  inside a git work tree  → ``git ls-files`` (tracked + untracked, .gitignore honoured)
  anything else           → recursive walk, sorted by name
  a file / missing path   → the path itself

Per-file failures never abort a run: unreadable or non-UTF-8 files produce
no Reference and a debug log entry.
"""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from mindflow.resolve.base import Resolved, content_hash
from mindflow.resolve.git import get_git_files, is_within_git_repo
from mindflow.resolve.models import Reference

FILE_TYPE = "file"


class ResolvedFilePath(Resolved):
    """A single file path awaiting conversion to a Reference."""

    def __init__(self, path: str) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"ResolvedFilePath({self.path!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ResolvedFilePath) and other.path == self.path

    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def type(self) -> str:
        return FILE_TYPE

    def _read(self) -> bytes | None:
        try:
            return Path(self.path).read_bytes()
        except OSError as exc:
            logger.debug("Could not read file: {} ({})", self.path, exc)
            return None

    def create_reference(self) -> Reference | None:
        data = self._read()
        if data is None:
            return None
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Could not convert bytes to utf8: {}", self.path)
            return None
        return Reference(
            type=self.type,
            content_hash=content_hash(data),
            text=text,
            size_bytes=len(data),
            path=self.path,
        )

    def size_bytes(self) -> int | None:
        try:
            return Path(self.path).stat().st_size
        except OSError as exc:
            logger.debug("Could not stat file: {} ({})", self.path, exc)
            return None

    def text_hash(self) -> str | None:
        data = self._read()
        if data is None:
            return None
        return content_hash(data)


@dataclass
class ResolveResult:
    """References created from a batch of paths, plus the files left out."""

    references: list[Reference] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        return sum(r.size_bytes for r in self.references)


class PathResolver:
    """Expand paths into ResolvedFilePath handles.

    Args:
        respect_git: List directories inside a git work tree via git.
        exclude: Glob patterns; a file is dropped if any component of its
            path below the resolved directory matches.
        max_depth: Recursion limit for the plain walk (0 = top level only).
    """

    def __init__(
        self,
        respect_git: bool = True,
        exclude: list[str] | None = None,
        max_depth: int = 64,
    ) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.respect_git = respect_git
        self.exclude = list(exclude or [])
        self.max_depth = max_depth

    def should_resolve(self, path_string: str) -> bool:
        path = Path(path_string)
        return path.is_dir() or path.is_file()

    def extract_files(self, path: Path) -> list[str]:
        """Return every file path under *path* (or *path* itself if not a directory)."""
        if not path.is_dir():
            return [str(path)]
        if self.respect_git and is_within_git_repo(path):
            files = get_git_files(path)
        else:
            files = [str(p) for p in self._walk(path, depth=0)]
        if self.exclude:
            files = [f for f in files if not self._is_excluded(Path(f).relative_to(path))]
        return files

    def resolve(self, path: str) -> list[ResolvedFilePath]:
        return [ResolvedFilePath(f) for f in self.extract_files(Path(path))]

    # ------------------------------------------------------------------
    # Plain walk
    # ------------------------------------------------------------------

    def _walk(self, directory: Path, depth: int) -> list[Path]:
        if depth > self.max_depth:
            logger.debug("Max depth {} reached at {}", self.max_depth, directory)
            return []
        try:
            entries = sorted(directory.iterdir())
        except PermissionError:
            logger.debug("Permission denied listing {}", directory)
            return []
        files: list[Path] = []
        for entry in entries:
            try:
                is_dir = entry.is_dir()
                is_file = entry.is_file()
                is_symlink = entry.is_symlink()
            except OSError as exc:
                logger.debug("Could not stat {} ({})", entry, exc)
                continue
            if is_dir:
                if is_symlink:
                    logger.debug("Not following symlinked directory {}", entry)
                    continue
                files.extend(self._walk(entry, depth=depth + 1))
            elif is_file:
                files.append(entry)
            else:
                logger.debug("Skipping non-file entry: {}", entry)
        return files

    def _is_excluded(self, relative: Path) -> bool:
        return any(
            fnmatch.fnmatch(part, pat) for part in relative.parts for pat in self.exclude
        )


def resolve_references(paths: list[str], resolver: PathResolver | None = None) -> ResolveResult:
    """Resolve *paths* and build one Reference per usable file.

    Unreadable and non-UTF-8 files are recorded in ``skipped``; the
    remaining files are still processed.
    """
    resolver = resolver or PathResolver()
    result = ResolveResult()
    for path in paths:
        for resolved in resolver.resolve(path):
            reference = resolved.create_reference()
            if reference is None:
                result.skipped.append(resolved.path)
            else:
                result.references.append(reference)
    return result
