"""
Page domain models - requests and results for ranged article retrieval.
Pure value objects with no external dependencies.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


DEFAULT_CHUNK_LENGTH = 5000


class StatusKind(Enum):
    """How the provider answered a ranged request."""
    FULL = "full"
    PARTIAL = "partial"


def _as_offset(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class PageRequest:
    """A byte window ``[start, start + length)`` over an article's HTML."""
    title: str
    start: int = 0
    length: int = DEFAULT_CHUNK_LENGTH

    def __post_init__(self) -> None:
        # JSON numbers like 5000.0 pass integer schema checks; offsets must be ints
        for name in ("start", "length"):
            object.__setattr__(self, name, _as_offset(name, getattr(self, name)))
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError("title must be a non-empty string")
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if self.length < 1:
            raise ValueError(f"length must be > 0, got {self.length}")

    @property
    def end(self) -> int:
        """Inclusive last byte offset requested."""
        return self.start + self.length - 1

    def range_header(self) -> str:
        """Value for the HTTP ``Range`` request header."""
        return f"bytes={self.start}-{self.end}"


@dataclass(frozen=True)
class RangedFetchResult:
    """Classified response of a single ranged HTML fetch."""
    status_kind: StatusKind
    body_text: str
    total_length: Optional[int] = None
    byte_length: Optional[int] = None

    @property
    def returned_length(self) -> int:
        """Number of bytes the provider actually returned."""
        if self.byte_length is not None:
            return self.byte_length
        return len(self.body_text)

    @property
    def is_partial(self) -> bool:
        return self.status_kind is StatusKind.PARTIAL


@dataclass(frozen=True)
class PaginatedChunk:
    """One rendered slice of an article, ready to hand back to the caller."""
    text: str
    has_more: bool
    range_start: int
    range_end: int
    total_length: Optional[int] = None

    @property
    def next_start(self) -> Optional[int]:
        """Offset to request next, or None when nothing remains."""
        return self.range_end + 1 if self.has_more else None
