"""Serializers for authentication flows (register, login, profile)."""

from django.core.validators import RegexValidator
from rest_framework import serializers

from .profiles import ROLES

username_validator = RegexValidator(
    r"^[A-Za-z0-9_]+$",
    "Username may only contain letters, digits and underscores.",
)


class RegisterSerializer(serializers.Serializer):
    """Validate sign-up input before it reaches an auth provider.

    Uniqueness is checked by the provider itself since it owns the user set.
    """

    username = serializers.CharField(max_length=150, validators=[username_validator])
    password = serializers.CharField(write_only=True, min_length=6, trim_whitespace=False)


class LoginSerializer(serializers.Serializer):
    """Credentials for sign-in; checking them is the provider's job."""

    username = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class RefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class ProfileSerializer(serializers.Serializer):
    """Read-only profile payload for responses."""

    id = serializers.CharField(read_only=True)
    username = serializers.CharField(read_only=True)
    email = serializers.CharField(read_only=True)
    role = serializers.ChoiceField(choices=ROLES, read_only=True)
    created_at = serializers.DateTimeField(read_only=True)


__all__ = [
    "LoginSerializer",
    "ProfileSerializer",
    "RefreshSerializer",
    "RegisterSerializer",
    "username_validator",
]
