"""App configuration for authentication components."""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Authentication app holds profiles, auth providers and token handling."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
