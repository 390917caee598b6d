"""Content store backed by the relational database through the async ORM.

Database errors are not caught here; they reach the caller unchanged and are
turned into 503 responses by ``core.exceptions``.
"""

import logging
import uuid
from typing import Any, Mapping

from django.db.models import F, Sum
from django.utils import timezone

from articles import validation
from articles.exceptions import NotFound
from articles.models import Article, Comment
from articles.records import (
    Article as ArticleRecord,
    Comment as CommentRecord,
    CommentWithArticle,
    Statistics,
)

from .base import DEFAULT_LATEST_LIMIT, DEFAULT_POPULAR_LIMIT, ContentStore

logger = logging.getLogger(__name__)


def _as_uuid(value: Any) -> uuid.UUID | None:
    """Return the primary key as a UUID, or None for ids that cannot exist."""

    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class DatabaseContentStore(ContentStore):
    """Hosted implementation of the content contract.

    Ids are random UUIDs. View increments run as a single
    ``UPDATE ... SET views = views + 1`` so concurrent page loads never lose
    a count.
    """

    async def _get_article_row(self, article_id: str) -> Article:
        pk = _as_uuid(article_id)
        if pk is None:
            raise NotFound("article", article_id)
        try:
            return await Article.objects.aget(pk=pk)
        except Article.DoesNotExist:
            raise NotFound("article", article_id) from None

    async def _get_comment_row(self, comment_id: str) -> Comment:
        pk = _as_uuid(comment_id)
        if pk is None:
            raise NotFound("comment", comment_id)
        try:
            return await Comment.objects.aget(pk=pk)
        except Comment.DoesNotExist:
            raise NotFound("comment", comment_id) from None

    # Articles

    async def list_articles(self, category: str | None = None) -> list[ArticleRecord]:
        category = validation.clean_category(category)
        queryset = Article.objects.order_by("-created_at")
        if category:
            queryset = queryset.filter(category=category)
        return [article.to_record() async for article in queryset]

    async def get_article(self, article_id: str) -> ArticleRecord | None:
        try:
            article = await self._get_article_row(article_id)
        except NotFound:
            return None
        return article.to_record()

    async def create_article(self, fields: Mapping[str, Any]) -> ArticleRecord:
        cleaned = validation.clean_new_article(fields)
        now = timezone.now()
        article = await Article.objects.acreate(views=0, created_at=now, updated_at=now, **cleaned)
        logger.info("Created article %s (%s)", article.pk, article.category)
        return article.to_record()

    async def update_article(self, article_id: str, fields: Mapping[str, Any]) -> ArticleRecord:
        cleaned = validation.clean_article_update(fields)
        article = await self._get_article_row(article_id)
        for name, value in cleaned.items():
            setattr(article, name, value)
        article.updated_at = timezone.now()
        await article.asave(update_fields=[*cleaned, "updated_at"])
        logger.info("Updated article %s fields=%s", article.pk, sorted(cleaned))
        return article.to_record()

    async def delete_article(self, article_id: str) -> None:
        article = await self._get_article_row(article_id)
        # Comments go with it through the ON DELETE CASCADE foreign key.
        _, per_model = await article.adelete()
        logger.info(
            "Deleted article %s and %d comment(s)",
            article_id,
            per_model.get(Comment._meta.label, 0),
        )

    async def increment_article_views(self, article_id: str) -> None:
        pk = _as_uuid(article_id)
        if pk is None:
            return
        updated = await Article.objects.filter(pk=pk).aupdate(views=F("views") + 1)
        if not updated:
            logger.debug("View increment for unknown article %s ignored", article_id)

    async def list_latest_articles(self, limit: int = DEFAULT_LATEST_LIMIT) -> list[ArticleRecord]:
        limit = validation.clean_limit(limit)
        queryset = Article.objects.order_by("-created_at")[:limit]
        return [article.to_record() async for article in queryset]

    async def list_popular_articles(self, limit: int = DEFAULT_POPULAR_LIMIT) -> list[ArticleRecord]:
        limit = validation.clean_limit(limit)
        queryset = Article.objects.order_by("-views", "-created_at")[:limit]
        return [article.to_record() async for article in queryset]

    # Comments

    async def list_comments(self, article_id: str) -> list[CommentRecord]:
        pk = _as_uuid(article_id)
        if pk is None:
            return []
        queryset = Comment.objects.filter(article_id=pk).order_by("-created_at")
        return [comment.to_record() async for comment in queryset]

    async def list_all_comments(self) -> list[CommentWithArticle]:
        queryset = Comment.objects.select_related("article").order_by("-created_at")
        rows = []
        async for comment in queryset:
            record = comment.to_record()
            rows.append(CommentWithArticle(**vars(record), article_title=comment.article.title))
        return rows

    async def add_comment(self, article_id: str, nickname: str, content: str) -> CommentRecord:
        cleaned = validation.clean_new_comment(nickname, content)
        article = await self._get_article_row(article_id)
        now = timezone.now()
        comment = await Comment.objects.acreate(article=article, created_at=now, updated_at=now, **cleaned)
        logger.info("Added comment %s to article %s", comment.pk, article.pk)
        return comment.to_record()

    async def update_comment(self, comment_id: str, content: str) -> CommentRecord:
        content = validation.clean_comment_content(content)
        comment = await self._get_comment_row(comment_id)
        comment.content = content
        comment.updated_at = timezone.now()
        await comment.asave(update_fields=["content", "updated_at"])
        return comment.to_record()

    async def delete_comment(self, comment_id: str) -> None:
        comment = await self._get_comment_row(comment_id)
        await comment.adelete()
        logger.info("Deleted comment %s", comment_id)

    # Dashboard

    async def get_statistics(self) -> Statistics:
        total_articles = await Article.objects.acount()
        total_comments = await Comment.objects.acount()
        aggregate = await Article.objects.aaggregate(total=Sum("views"))
        return Statistics(
            total_articles=total_articles,
            total_comments=total_comments,
            total_views=aggregate["total"] or 0,
        )


__all__ = ["DatabaseContentStore"]
