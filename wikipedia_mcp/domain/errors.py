"""
Exception hierarchy for the Wikipedia MCP server.
"""

from __future__ import annotations
from typing import Any, Dict, Optional


class WikipediaMCPError(Exception):
    """Base exception for all project errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'context': self.context
        }


class RemoteFetchError(WikipediaMCPError):
    """The remote provider answered with an unexpected status, or could not be reached."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
        cause: Optional[str] = None,
        url: Optional[str] = None
    ):
        context = {'status': status, 'status_text': status_text, 'cause': cause, 'url': url}
        super().__init__(message, context={k: v for k, v in context.items() if v is not None})
        self.status = status
        self.status_text = status_text
        self.cause = cause
        self.url = url

    @classmethod
    def from_status(cls, status: int, status_text: str, url: Optional[str] = None) -> RemoteFetchError:
        return cls(
            f"Wikipedia API error: {status} {status_text}".rstrip(),
            status=status,
            status_text=status_text,
            url=url
        )

    @classmethod
    def from_cause(cls, cause: BaseException, url: Optional[str] = None) -> RemoteFetchError:
        description = str(cause) or cause.__class__.__name__
        return cls(
            f"Wikipedia API request failed: {description}",
            cause=description,
            url=url
        )


class PluginLoadError(WikipediaMCPError):
    """A tool plugin module could not be loaded."""
