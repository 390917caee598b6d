"""Public and admin endpoints over the active content store."""

from typing import Any, Mapping

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from authentication.permissions import IsAdminProfile
from core.response import BaseAPIView, BaseViewSet, api_response
from .exceptions import NotFound, ValidationFailure
from .serializers import (
    ArticleSerializer,
    CommentSerializer,
    CommentWithArticleSerializer,
    StatisticsSerializer,
)
from .stores import ContentStore, get_content_store
from .stores.base import DEFAULT_LATEST_LIMIT, DEFAULT_POPULAR_LIMIT


class ContentStoreMixin:
    """Give a view access to the content store.

    ``content_store`` may be set on a subclass (or patched in tests);
    otherwise the process-wide store is used.
    """

    content_store: ContentStore | None = None

    def get_content_store(self) -> ContentStore:
        return self.content_store or get_content_store()

    def call_store(self, operation: str, *args: Any) -> Any:
        """Run an async store operation from a sync DRF handler."""
        return async_to_sync(getattr(self.get_content_store(), operation))(*args)

    def get_payload(self, request) -> Mapping[str, Any]:
        """Return the request body, which must be a JSON object or form data."""
        if not isinstance(request.data, Mapping):
            raise ValidationFailure({"non_field_errors": ["Expected an object body."]})
        return request.data


class ArticleViewSet(ContentStoreMixin, BaseViewSet):
    """Articles: public reads, view counting and comments; admin writes."""

    admin_actions = {"create", "update", "partial_update", "destroy"}

    def get_permissions(self):
        if self.action in self.admin_actions:
            return [IsAdminProfile()]
        return []

    def list(self, request):
        articles = self.call_store("list_articles", request.query_params.get("category"))
        return api_response(ArticleSerializer(articles, many=True).data)

    def retrieve(self, request, pk=None):
        article = self.call_store("get_article", pk)
        if article is None:
            raise NotFound("article", pk)
        return api_response(ArticleSerializer(article).data)

    def create(self, request):
        article = self.call_store("create_article", self.get_payload(request))
        return api_response(ArticleSerializer(article).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        article = self.call_store("update_article", pk, self.get_payload(request))
        return api_response(ArticleSerializer(article).data)

    # Edits are always partial; PUT behaves like PATCH.
    update = partial_update

    def destroy(self, request, pk=None):
        self.call_store("delete_article", pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def latest(self, request):
        limit = request.query_params.get("limit", DEFAULT_LATEST_LIMIT)
        articles = self.call_store("list_latest_articles", limit)
        return api_response(ArticleSerializer(articles, many=True).data)

    @action(detail=False, methods=["get"])
    def popular(self, request):
        limit = request.query_params.get("limit", DEFAULT_POPULAR_LIMIT)
        articles = self.call_store("list_popular_articles", limit)
        return api_response(ArticleSerializer(articles, many=True).data)

    @action(detail=True, methods=["post"], url_path="view")
    def record_view(self, request, pk=None):
        """Count one page view of the article."""
        self.call_store("increment_article_views", pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["get", "post"])
    def comments(self, request, pk=None):
        """List the article's comments, or post a new anonymous one."""
        if request.method == "POST":
            payload = self.get_payload(request)
            comment = self.call_store(
                "add_comment",
                pk,
                payload.get("nickname", ""),
                payload.get("content", ""),
            )
            return api_response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)

        comments = self.call_store("list_comments", pk)
        return api_response(CommentSerializer(comments, many=True).data)


class CommentViewSet(ContentStoreMixin, BaseViewSet):
    """Comment moderation: admins list everything; edits and deletes are public."""

    def get_permissions(self):
        if self.action == "list":
            return [IsAdminProfile()]
        return []

    def list(self, request):
        comments = self.call_store("list_all_comments")
        return api_response(CommentWithArticleSerializer(comments, many=True).data)

    def partial_update(self, request, pk=None):
        comment = self.call_store("update_comment", pk, self.get_payload(request).get("content", ""))
        return api_response(CommentSerializer(comment).data)

    update = partial_update

    def destroy(self, request, pk=None):
        self.call_store("delete_comment", pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class StatisticsView(ContentStoreMixin, BaseAPIView):
    """Dashboard counters for the admin back-office."""

    permission_classes = [IsAdminProfile]

    def get(self, request):
        statistics = self.call_store("get_statistics")
        return api_response(StatisticsSerializer(statistics).data)


__all__ = ["ArticleViewSet", "CommentViewSet", "StatisticsView"]
