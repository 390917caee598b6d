"""Serializers for article and comment payloads.

The ``*InputSerializer`` classes are run by the content stores themselves
(see ``articles.validation``) so every backend enforces the same rules. The
remaining serializers render store records for the API envelope.
"""

from rest_framework import serializers

from .records import CATEGORIES

DEFAULT_AUTHOR = "Editorial Team"


class ArticleInputSerializer(serializers.Serializer):
    """Fields an admin supplies when creating an article."""

    title = serializers.CharField(max_length=200)
    summary = serializers.CharField(max_length=500)
    content = serializers.CharField()
    category = serializers.ChoiceField(choices=CATEGORIES)
    cover_image = serializers.URLField(required=False, allow_blank=True, default="")
    author = serializers.CharField(max_length=50, required=False, default=DEFAULT_AUTHOR)


class ArticleUpdateInputSerializer(ArticleInputSerializer):
    """Edit payload; an explicit edit may also correct the view counter."""

    views = serializers.IntegerField(min_value=0, required=False)


class CommentInputSerializer(serializers.Serializer):
    nickname = serializers.CharField(max_length=20)
    content = serializers.CharField(max_length=500)


class CommentUpdateInputSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=500)


class LimitInputSerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1)


class ArticleSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    summary = serializers.CharField(read_only=True)
    content = serializers.CharField(read_only=True)
    category = serializers.CharField(read_only=True)
    cover_image = serializers.CharField(read_only=True)
    author = serializers.CharField(read_only=True)
    views = serializers.IntegerField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class CommentSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    article_id = serializers.CharField(read_only=True)
    nickname = serializers.CharField(read_only=True)
    content = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class CommentWithArticleSerializer(CommentSerializer):
    """Admin listing row: the comment plus its article's title."""

    article_title = serializers.CharField(read_only=True)


class StatisticsSerializer(serializers.Serializer):
    total_articles = serializers.IntegerField(read_only=True)
    total_comments = serializers.IntegerField(read_only=True)
    total_views = serializers.IntegerField(read_only=True)


__all__ = [
    "ArticleInputSerializer",
    "ArticleSerializer",
    "ArticleUpdateInputSerializer",
    "CommentInputSerializer",
    "CommentSerializer",
    "CommentUpdateInputSerializer",
    "CommentWithArticleSerializer",
    "DEFAULT_AUTHOR",
    "LimitInputSerializer",
    "StatisticsSerializer",
]
