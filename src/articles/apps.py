"""App configuration for articles, comments and their data stores."""

from django.apps import AppConfig


class ArticlesConfig(AppConfig):
    """Articles app holds the content models, stores and API views."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "articles"
