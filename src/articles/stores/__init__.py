"""Content store selection.

The concrete store is picked from ``settings.USE_MOCK_DATA`` the first time
it is requested and reused for the rest of the process.
"""

from django.conf import settings

from .base import ContentStore

_store: ContentStore | None = None


def build_content_store() -> ContentStore:
    """Instantiate the store configured for this process."""

    if settings.USE_MOCK_DATA:
        from .mock import MockContentStore

        return MockContentStore()

    from .database import DatabaseContentStore

    return DatabaseContentStore()


def get_content_store() -> ContentStore:
    """Return the process-wide content store, building it on first use."""

    global _store
    if _store is None:
        _store = build_content_store()
    return _store


__all__ = ["ContentStore", "build_content_store", "get_content_store"]
