"""Reference records produced by resolvers."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Reference:
    type: str
    content_hash: str
    text: str
    size_bytes: int
    path: str

    def to_dict(self) -> dict:
        return asdict(self)
