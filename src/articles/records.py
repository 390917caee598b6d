"""Plain records exchanged between the content stores and their callers.

Both the mock store and the database store return these, so callers never
see ORM instances or mock internals.
"""

from dataclasses import dataclass
from datetime import datetime

CATEGORIES = ("news", "article", "report")

UNKNOWN_ARTICLE_TITLE = "Unknown article"


@dataclass
class Article:
    id: str
    title: str
    summary: str
    content: str
    category: str
    cover_image: str
    author: str
    views: int
    created_at: datetime
    updated_at: datetime


@dataclass
class Comment:
    id: str
    article_id: str
    nickname: str
    content: str
    created_at: datetime
    updated_at: datetime


@dataclass
class CommentWithArticle(Comment):
    """Comment joined with its parent article's title for the admin listing."""

    article_title: str = UNKNOWN_ARTICLE_TITLE


@dataclass
class Statistics:
    total_articles: int
    total_comments: int
    total_views: int


__all__ = [
    "Article",
    "CATEGORIES",
    "Comment",
    "CommentWithArticle",
    "Statistics",
    "UNKNOWN_ARTICLE_TITLE",
]
