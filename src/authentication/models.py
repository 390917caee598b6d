"""Persisted profiles for the database auth provider.

Passwords are stored as bcrypt hashes in ``password_hash``; the role is a
plain ``user``/``admin`` choice rather than Django groups or permissions.
"""

import uuid
from typing import ClassVar, Optional

from django.contrib.auth.models import AbstractBaseUser
from django.db import models

from .managers import UserManager
from .profiles import ROLE_ADMIN, ROLE_USER, Profile


class User(AbstractBaseUser):
    """Site account identified by username."""

    class Role(models.TextChoices):
        USER = ROLE_USER, "User"
        ADMIN = ROLE_ADMIN, "Admin"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(blank=True)
    password_hash = models.CharField(max_length=128)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.USER)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD = "username"
    REQUIRED_FIELDS: ClassVar[list[str]] = []

    objects = UserManager()

    class Meta:
        """Oldest accounts first, so the first registrant leads the list."""
        ordering = ["created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.username

    def set_password(self, raw_password: Optional[str]) -> None:  # type: ignore[override]
        """Override to ensure bcrypt hashing via manager utility."""

        if raw_password is None:
            self.password_hash = ""
        else:
            self.password_hash = UserManager.hash_password(raw_password)

    def check_password(self, raw_password: Optional[str]) -> bool:  # type: ignore[override]
        """Delegate to bcrypt verification helper."""

        if raw_password is None:
            return False
        return UserManager.verify_password(self, raw_password)

    def to_profile(self) -> Profile:
        return Profile(
            id=str(self.id),
            username=self.username,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
        )


__all__ = ["User"]
