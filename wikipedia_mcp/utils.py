"""
Utility functions for Wikipedia MCP.
"""

import html
import logging
import re
import sys
from typing import Optional


_TAG_RE = re.compile(r"</?[^>]+(>|$)")


def setup_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    """Setup logging configuration.

    Logs always go to stderr: stdout carries the MCP stdio transport.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=fmt or '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

    # Reduce noise from third-party libraries unless debugging
    if level.upper() != "DEBUG":
        for name in ("httpx", "httpcore", "mcp"):
            logging.getLogger(name).setLevel(logging.WARNING)


def strip_html(text: str) -> str:
    """Remove markup tags and unescape entities (search snippets carry both)."""
    return html.unescape(_TAG_RE.sub("", text))
