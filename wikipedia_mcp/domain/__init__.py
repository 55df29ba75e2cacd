"""Domain layer - Pure business logic with no external dependencies."""

from .models.page import (
    PageRequest,
    PaginatedChunk,
    RangedFetchResult,
    StatusKind
)
from .errors import WikipediaMCPError, RemoteFetchError

__all__ = [
    "PageRequest",
    "PaginatedChunk",
    "RangedFetchResult",
    "StatusKind",
    "WikipediaMCPError",
    "RemoteFetchError"
]
