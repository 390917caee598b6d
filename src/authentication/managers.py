"""Custom user manager handling bcrypt hashing and verification."""

import uuid

import bcrypt
from asgiref.sync import sync_to_async
from django.contrib.auth.base_user import BaseUserManager


class UserManager(BaseUserManager):
    """Manager to create users with bcrypt password hashes."""

    use_in_migrations = True

    def _build_user(self, username: str, password: str, **extra_fields):
        if not username:
            raise ValueError("The username must be set")
        user = self.model(id=uuid.uuid4(), username=username, **extra_fields)
        user.password_hash = self.hash_password(password)
        return user

    def create_user(self, username: str, password: str | None = None, **extra_fields):
        """Create a user with a bcrypt-hashed password."""
        if password is None:
            raise ValueError("Password must be provided")
        user = self._build_user(username, password, **extra_fields)
        user.save(using=self._db)
        return user

    async def acreate_user(self, username: str, password: str | None = None, **extra_fields):
        """Async variant of ``create_user`` for the database auth provider."""
        if password is None:
            raise ValueError("Password must be provided")
        # Hashing runs in a worker thread so the event loop keeps serving.
        user = await sync_to_async(self._build_user)(username, password, **extra_fields)
        await user.asave(using=self._db)
        return user

    @staticmethod
    def hash_password(raw_password: str) -> str:
        """Hash a raw password using bcrypt and return the utf-8 string."""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(raw_password.encode(), salt)
        return hashed.decode()

    @staticmethod
    def verify_password(user, raw_password: str) -> bool:
        """Verify raw password against stored bcrypt hash."""

        if not user.password_hash:
            return False
        return bcrypt.checkpw(raw_password.encode(), user.password_hash.encode("utf-8"))


__all__ = ["UserManager"]
