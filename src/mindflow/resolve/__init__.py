"""Mindflow resolvers — local paths to content-addressed References."""

from mindflow.resolve.base import Resolved, content_hash
from mindflow.resolve.file_path import (
    PathResolver,
    ResolvedFilePath,
    ResolveResult,
    resolve_references,
)
from mindflow.resolve.git import GitListError
from mindflow.resolve.models import Reference

__all__ = [
    "GitListError",
    "PathResolver",
    "Reference",
    "ResolveResult",
    "Resolved",
    "ResolvedFilePath",
    "content_hash",
    "resolve_references",
]
