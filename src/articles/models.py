"""Database tables behind the hosted content store."""

import uuid

from django.db import models
from django.utils import timezone

from . import records


class Article(models.Model):
    """Published content item with a category and a view counter."""

    class Category(models.TextChoices):
        NEWS = "news", "News"
        ARTICLE = "article", "Article"
        REPORT = "report", "Report"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    summary = models.CharField(max_length=500)
    content = models.TextField()
    category = models.CharField(max_length=16, choices=Category.choices, db_index=True)
    cover_image = models.URLField(max_length=500, blank=True, default="")
    author = models.CharField(max_length=50)
    views = models.PositiveIntegerField(default=0)
    # Set explicitly by the store so created_at == updated_at on insert and
    # view increments leave updated_at alone.
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title

    def to_record(self) -> records.Article:
        return records.Article(
            id=str(self.id),
            title=self.title,
            summary=self.summary,
            content=self.content,
            category=self.category,
            cover_image=self.cover_image,
            author=self.author,
            views=self.views,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class Comment(models.Model):
    """Anonymous comment; removed together with its article."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    article = models.ForeignKey(Article, on_delete=models.CASCADE, related_name="comments")
    nickname = models.CharField(max_length=20)
    content = models.CharField(max_length=500)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.nickname}: {self.content[:30]}"

    def to_record(self) -> records.Comment:
        return records.Comment(
            id=str(self.id),
            article_id=str(self.article_id),
            nickname=self.nickname,
            content=self.content,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


__all__ = ["Article", "Comment"]
