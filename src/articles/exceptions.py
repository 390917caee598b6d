"""Errors raised by the content data access layer."""

from typing import Any


class ContentError(Exception):
    """Base class for failures the content stores raise on purpose."""


class NotFound(ContentError):
    """The referenced article or comment does not exist in the active store."""

    def __init__(self, kind: str, object_id: str):
        self.kind = kind
        self.object_id = object_id
        super().__init__(f"{kind.capitalize()} not found")


class ValidationFailure(ContentError):
    """Input rejected before reaching the store.

    ``errors`` maps field names to lists of messages, the same shape DRF
    serializers produce.
    """

    def __init__(self, errors: dict[str, list[Any]]):
        self.errors = errors
        super().__init__("Invalid input")


__all__ = ["ContentError", "NotFound", "ValidationFailure"]
