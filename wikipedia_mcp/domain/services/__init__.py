"""Domain services package."""

from .pagination import paginate, continuation_notice, has_more_content

__all__ = ["paginate", "continuation_notice", "has_more_content"]
