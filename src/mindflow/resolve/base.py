"""Base interface for resolved inputs."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod

from mindflow.resolve.models import Reference


def content_hash(data: bytes) -> str:
    """Hex SHA-256 digest of *data*."""
    return hashlib.sha256(data).hexdigest()


class Resolved(ABC):
    """Abstract base for anything a resolver turns into a Reference.

    Subclasses report their type tag, size and content hash without
    building the full record, so callers can check sizes or deduplicate
    before reading text.
    """

    @property
    @abstractmethod
    def type(self) -> str:
        """Type tag copied into every Reference."""

    @abstractmethod
    def create_reference(self) -> Reference | None:
        """Build the Reference, or return None if the input cannot be used."""

    @abstractmethod
    def size_bytes(self) -> int | None:
        """Size of the underlying content, or None if unavailable."""

    @abstractmethod
    def text_hash(self) -> str | None:
        """Hex SHA-256 of the raw content, or None if unavailable."""
