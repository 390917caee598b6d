"""Routing for articles, comments and dashboard statistics."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import ArticleViewSet, CommentViewSet, StatisticsView

router = DefaultRouter()
router.register(r"articles", ArticleViewSet, basename="article")
router.register(r"comments", CommentViewSet, basename="comment")

urlpatterns = [
    path("", include(router.urls)),
    path("statistics/", StatisticsView.as_view(), name="statistics"),
]
