"""Input checks shared by every content store.

Each helper returns cleaned values (whitespace trimmed, defaults applied) or
raises ``ValidationFailure`` with a field -> messages mapping.
"""

from typing import Any, Mapping

from rest_framework import serializers

from .exceptions import ValidationFailure
from .records import CATEGORIES
from .serializers import (
    ArticleInputSerializer,
    ArticleUpdateInputSerializer,
    CommentInputSerializer,
    CommentUpdateInputSerializer,
    LimitInputSerializer,
)


def _errors_to_dict(errors: Any) -> dict[str, list[str]]:
    """Flatten DRF ErrorDetail structures into plain strings."""

    if isinstance(errors, Mapping):
        return {
            str(field): [str(message) for message in (messages if isinstance(messages, list) else [messages])]
            for field, messages in errors.items()
        }
    return {"non_field_errors": [str(message) for message in errors]}


def _run(serializer: serializers.Serializer) -> dict[str, Any]:
    if not serializer.is_valid():
        raise ValidationFailure(_errors_to_dict(serializer.errors))
    return dict(serializer.validated_data)


def clean_new_article(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Validate the fields for a new article; ids, views and timestamps are ignored."""
    return _run(ArticleInputSerializer(data=fields))


def clean_article_update(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Validate a partial article edit. Only supplied fields are returned."""
    return _run(ArticleUpdateInputSerializer(data=fields, partial=True))


def clean_new_comment(nickname: Any, content: Any) -> dict[str, Any]:
    return _run(CommentInputSerializer(data={"nickname": nickname, "content": content}))


def clean_comment_content(content: Any) -> str:
    return _run(CommentUpdateInputSerializer(data={"content": content}))["content"]


def clean_category(category: str | None) -> str | None:
    if category in (None, ""):
        return None
    if category not in CATEGORIES:
        raise ValidationFailure({"category": [f'"{category}" is not a valid choice.']})
    return category


def clean_limit(limit: Any) -> int:
    """Accept a positive whole number (or its string form) as a listing limit."""
    return _run(LimitInputSerializer(data={"limit": limit}))["limit"]


__all__ = [
    "clean_article_update",
    "clean_category",
    "clean_comment_content",
    "clean_limit",
    "clean_new_article",
    "clean_new_comment",
]
