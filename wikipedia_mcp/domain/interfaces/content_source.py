"""
Content source protocol interface.
Defines the contract for remote Wikipedia provider implementations.
"""

from __future__ import annotations
from typing import Protocol, Dict, Any, Optional
from ..models.page import PageRequest, RangedFetchResult


class ContentSource(Protocol):
    """Protocol for remote article providers."""

    async def fetch_html_range(self, request: PageRequest) -> RangedFetchResult:
        """Fetch one byte window of an article's HTML and classify the response."""
        ...

    async def fetch_json(self, path: str) -> Dict[str, Any]:
        """Fetch a REST endpoint relative to the provider base and decode its JSON body."""
        ...

    async def search(self, query: str, limit: Optional[int] = None) -> Dict[str, Any]:
        """Run a full-text search and return the decoded payload."""
        ...
