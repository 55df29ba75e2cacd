"""Application layer - use-case orchestration."""

from .article_service import ArticleService, get_article_service, set_article_service

__all__ = ["ArticleService", "get_article_service", "set_article_service"]
