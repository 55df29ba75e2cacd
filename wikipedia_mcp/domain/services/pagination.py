"""
Pagination formatter - turns a ranged fetch result into a chunk with a continuation notice.

Pure function of its inputs: no I/O, never raises for a well-formed result.
"""

from __future__ import annotations
from typing import Optional

from ..models.page import PaginatedChunk, RangedFetchResult


def has_more_content(range_end: int, total_length: Optional[int]) -> bool:
    """An unknown total never signals more content."""
    if total_length is None:
        return False
    return range_end + 1 < total_length


def continuation_notice(range_start: int, range_end: int, total_length: Optional[int], has_more: bool) -> str:
    """Trailing annotation describing the delivered range and where to resume."""
    if total_length is None:
        notice = f"[Content range {range_start}-{range_end} (total length unknown).]"
    elif has_more:
        notice = (
            f"[Content range {range_start}-{range_end} of {total_length} bytes. "
            f"More content is available; request starting from {range_end + 1} to continue.]"
        )
    else:
        notice = f"[Content range {range_start}-{range_end} of {total_length} bytes. End of article.]"
    return "\n\n---\n" + notice


def paginate(result: RangedFetchResult, start: int) -> PaginatedChunk:
    """Build the chunk for a fetch that was requested at offset ``start``."""
    range_start = start
    # Empty body yields range_end == start - 1
    range_end = start + result.returned_length - 1
    # A FULL body is everything the provider will give; never point past it
    more = result.is_partial and has_more_content(range_end, result.total_length)

    text = result.body_text
    if start > 0 or more:
        text += continuation_notice(range_start, range_end, result.total_length, more)

    return PaginatedChunk(
        text=text,
        has_more=more,
        range_start=range_start,
        range_end=range_end,
        total_length=result.total_length
    )
