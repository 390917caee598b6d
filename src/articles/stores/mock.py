"""In-memory content store seeded with sample rows.

Used when ``USE_MOCK_DATA`` is enabled so the site runs without a database.
Every call sleeps for ``MOCK_DELAY_MS`` to behave like a network round-trip.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Any, Iterable, Mapping, TypeVar

from django.conf import settings
from django.utils import timezone

from articles import validation
from articles.exceptions import NotFound
from articles.records import Article, Comment, CommentWithArticle, Statistics, UNKNOWN_ARTICLE_TITLE
from articles.seed import SAMPLE_ARTICLES, SAMPLE_COMMENTS

from .base import DEFAULT_LATEST_LIMIT, DEFAULT_POPULAR_LIMIT, ContentStore

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Article, Comment)


def _newest_first(records: Iterable[RecordT]) -> list[RecordT]:
    # Ties on created_at resolve to the most recently inserted row.
    return sorted(reversed(list(records)), key=lambda record: record.created_at, reverse=True)


class MockContentStore(ContentStore):
    """Content store backed by two id-keyed dicts owned by this instance.

    Ids are sequential integers rendered as strings and are never reused,
    even after deletion. Records are copied on the way out so callers cannot
    mutate the store behind its back.
    """

    def __init__(self, delay_ms: int | None = None, seed: bool = True):
        if delay_ms is None:
            delay_ms = settings.MOCK_DELAY_MS
        self.delay = max(0, delay_ms) / 1000
        self._articles: dict[str, Article] = {}
        self._comments: dict[str, Comment] = {}
        self._last_article_id = 0
        self._last_comment_id = 0
        if seed:
            self._seed()

    def _seed(self) -> None:
        for row in SAMPLE_ARTICLES:
            article = Article(**row)
            self._articles[article.id] = article
            self._last_article_id = max(self._last_article_id, int(article.id))
        for row in SAMPLE_COMMENTS:
            comment = Comment(**row)
            self._comments[comment.id] = comment
            self._last_comment_id = max(self._last_comment_id, int(comment.id))

    async def _simulate_latency(self) -> None:
        await asyncio.sleep(self.delay)

    def _next_article_id(self) -> str:
        self._last_article_id += 1
        return str(self._last_article_id)

    def _next_comment_id(self) -> str:
        self._last_comment_id += 1
        return str(self._last_comment_id)

    def _require_article(self, article_id: str) -> Article:
        try:
            return self._articles[article_id]
        except KeyError:
            raise NotFound("article", article_id) from None

    def _require_comment(self, comment_id: str) -> Comment:
        try:
            return self._comments[comment_id]
        except KeyError:
            raise NotFound("comment", comment_id) from None

    # Articles

    async def list_articles(self, category: str | None = None) -> list[Article]:
        category = validation.clean_category(category)
        await self._simulate_latency()
        articles = self._articles.values()
        if category:
            articles = [article for article in articles if article.category == category]
        return [replace(article) for article in _newest_first(articles)]

    async def get_article(self, article_id: str) -> Article | None:
        await self._simulate_latency()
        article = self._articles.get(str(article_id))
        return replace(article) if article else None

    async def create_article(self, fields: Mapping[str, Any]) -> Article:
        cleaned = validation.clean_new_article(fields)
        await self._simulate_latency()
        now = timezone.now()
        article = Article(id=self._next_article_id(), views=0, created_at=now, updated_at=now, **cleaned)
        self._articles[article.id] = article
        logger.info("Created article %s (%s)", article.id, article.category)
        return replace(article)

    async def update_article(self, article_id: str, fields: Mapping[str, Any]) -> Article:
        cleaned = validation.clean_article_update(fields)
        await self._simulate_latency()
        current = self._require_article(str(article_id))
        updated = replace(current, **cleaned, updated_at=timezone.now())
        self._articles[updated.id] = updated
        logger.info("Updated article %s fields=%s", updated.id, sorted(cleaned))
        return replace(updated)

    async def delete_article(self, article_id: str) -> None:
        await self._simulate_latency()
        article = self._require_article(str(article_id))
        del self._articles[article.id]
        removed = [comment.id for comment in self._comments.values() if comment.article_id == article.id]
        for comment_id in removed:
            del self._comments[comment_id]
        logger.info("Deleted article %s and %d comment(s)", article.id, len(removed))

    async def increment_article_views(self, article_id: str) -> None:
        await self._simulate_latency()
        article = self._articles.get(str(article_id))
        if article is None:
            logger.debug("View increment for unknown article %s ignored", article_id)
            return
        # Plain read-modify-write; concurrent callers may lose an increment.
        article.views += 1

    async def list_latest_articles(self, limit: int = DEFAULT_LATEST_LIMIT) -> list[Article]:
        limit = validation.clean_limit(limit)
        await self._simulate_latency()
        return [replace(article) for article in _newest_first(self._articles.values())[:limit]]

    async def list_popular_articles(self, limit: int = DEFAULT_POPULAR_LIMIT) -> list[Article]:
        limit = validation.clean_limit(limit)
        await self._simulate_latency()
        # Equal view counts fall back to newest first.
        ranked = sorted(_newest_first(self._articles.values()), key=lambda article: article.views, reverse=True)
        return [replace(article) for article in ranked[:limit]]

    # Comments

    async def list_comments(self, article_id: str) -> list[Comment]:
        await self._simulate_latency()
        article_id = str(article_id)
        comments = [comment for comment in self._comments.values() if comment.article_id == article_id]
        return [replace(comment) for comment in _newest_first(comments)]

    async def list_all_comments(self) -> list[CommentWithArticle]:
        await self._simulate_latency()
        rows = []
        for comment in _newest_first(self._comments.values()):
            article = self._articles.get(comment.article_id)
            rows.append(
                CommentWithArticle(
                    **vars(comment),
                    article_title=article.title if article else UNKNOWN_ARTICLE_TITLE,
                )
            )
        return rows

    async def add_comment(self, article_id: str, nickname: str, content: str) -> Comment:
        cleaned = validation.clean_new_comment(nickname, content)
        await self._simulate_latency()
        article = self._require_article(str(article_id))
        now = timezone.now()
        comment = Comment(
            id=self._next_comment_id(),
            article_id=article.id,
            created_at=now,
            updated_at=now,
            **cleaned,
        )
        self._comments[comment.id] = comment
        logger.info("Added comment %s to article %s", comment.id, article.id)
        return replace(comment)

    async def update_comment(self, comment_id: str, content: str) -> Comment:
        content = validation.clean_comment_content(content)
        await self._simulate_latency()
        current = self._require_comment(str(comment_id))
        updated = replace(current, content=content, updated_at=timezone.now())
        self._comments[updated.id] = updated
        return replace(updated)

    async def delete_comment(self, comment_id: str) -> None:
        await self._simulate_latency()
        comment = self._require_comment(str(comment_id))
        del self._comments[comment.id]
        logger.info("Deleted comment %s", comment.id)

    # Dashboard

    async def get_statistics(self) -> Statistics:
        await self._simulate_latency()
        return Statistics(
            total_articles=len(self._articles),
            total_comments=len(self._comments),
            total_views=sum(article.views for article in self._articles.values()),
        )


__all__ = ["MockContentStore"]
