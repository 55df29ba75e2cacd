"""Wikipedia provider adapters."""

from .client import WikipediaClient, classify_ranged_response, encode_title, parse_content_range_total

__all__ = ['WikipediaClient', 'classify_ranged_response', 'encode_title', 'parse_content_range_total']
