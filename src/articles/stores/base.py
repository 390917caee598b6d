"""The content data access contract shared by the mock and database stores."""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from articles.records import Article, Comment, CommentWithArticle, Statistics

DEFAULT_LATEST_LIMIT = 6
DEFAULT_POPULAR_LIMIT = 5


class ContentStore(ABC):
    """Async CRUD and query operations over articles and comments.

    Implementations must behave the same apart from transport: lists are
    ordered newest first unless stated otherwise, lookups that miss return
    ``None``, and mutations of missing rows raise ``NotFound``. Input is
    checked with ``articles.validation`` before any write.
    """

    # Articles

    @abstractmethod
    async def list_articles(self, category: str | None = None) -> list[Article]:
        """Return all articles (optionally of one category), newest first."""

    @abstractmethod
    async def get_article(self, article_id: str) -> Article | None:
        """Return the article or ``None`` when it does not exist."""

    @abstractmethod
    async def create_article(self, fields: Mapping[str, Any]) -> Article:
        """Create an article with a fresh id, zero views and equal timestamps."""

    @abstractmethod
    async def update_article(self, article_id: str, fields: Mapping[str, Any]) -> Article:
        """Apply a partial edit and refresh ``updated_at``."""

    @abstractmethod
    async def delete_article(self, article_id: str) -> None:
        """Delete the article together with its comments."""

    @abstractmethod
    async def increment_article_views(self, article_id: str) -> None:
        """Add one view; silently ignore unknown ids."""

    @abstractmethod
    async def list_latest_articles(self, limit: int = DEFAULT_LATEST_LIMIT) -> list[Article]:
        """Return at most ``limit`` articles, newest first."""

    @abstractmethod
    async def list_popular_articles(self, limit: int = DEFAULT_POPULAR_LIMIT) -> list[Article]:
        """Return at most ``limit`` articles, most viewed first."""

    # Comments

    @abstractmethod
    async def list_comments(self, article_id: str) -> list[Comment]:
        """Return the comments of one article, newest first."""

    @abstractmethod
    async def list_all_comments(self) -> list[CommentWithArticle]:
        """Return every comment joined with its article's title, newest first."""

    @abstractmethod
    async def add_comment(self, article_id: str, nickname: str, content: str) -> Comment:
        """Attach a new comment to an existing article."""

    @abstractmethod
    async def update_comment(self, comment_id: str, content: str) -> Comment:
        """Replace a comment's content and refresh ``updated_at``."""

    @abstractmethod
    async def delete_comment(self, comment_id: str) -> None:
        """Remove a comment."""

    # Dashboard

    @abstractmethod
    async def get_statistics(self) -> Statistics:
        """Count articles and comments and sum views at call time."""


__all__ = ["ContentStore", "DEFAULT_LATEST_LIMIT", "DEFAULT_POPULAR_LIMIT"]
