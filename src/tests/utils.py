"""Shared helpers for tests (store/provider wiring, user creation, fake Redis)."""

from __future__ import annotations

from typing import Dict
from unittest import mock

from rest_framework.test import APIClient

from articles.stores.mock import MockContentStore
from authentication.managers import UserManager
from authentication.models import User
from authentication.profiles import Profile
from authentication.providers import MockAuthProvider
from authentication.services import TokenService


class FakeRedis:
    """Minimal Redis stub supporting the commands used by TokenService."""

    def __init__(self):
        self._store: Dict[str, str] = {}

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Mimic Redis SETEX; TTL is ignored in tests, value stored in-memory."""
        self._store[key] = value

    def get(self, key: str):
        """Return stored value for key or None, matching Redis GET semantics."""
        return self._store.get(key)


def make_mock_store(seed: bool = True) -> MockContentStore:
    """Mock content store without the simulated network delay."""
    return MockContentStore(delay_ms=0, seed=seed)


def make_mock_provider(seed: bool = True) -> MockAuthProvider:
    """Mock auth provider without the simulated network delay."""
    return MockAuthProvider(delay_ms=0, seed=seed)


def wire_backends(test_case, store=None, provider=None, fake_redis=None):
    """Point the process-wide store, auth provider and Redis client at test doubles.

    Patches are undone automatically through ``addCleanup``.
    """

    patchers = [
        mock.patch("articles.stores._store", store or make_mock_store()),
        mock.patch("authentication.providers._provider", provider or make_mock_provider()),
        mock.patch("authentication.services.get_redis_client", return_value=fake_redis or FakeRedis()),
    ]
    for patcher in patchers:
        patcher.start()
        test_case.addCleanup(patcher.stop)


def create_user(username: str, password: str, role: str = User.Role.USER, **extra) -> User:
    """Create a user with a bcrypt-hashed password for tests."""

    return User.objects.create(
        username=username,
        email=f"{username}@example.com",
        password_hash=UserManager.hash_password(password),
        role=role,
        **extra,
    )


def auth_client(profile: Profile) -> APIClient:
    """Return an APIClient authenticated with a fresh access token."""
    token, _ = TokenService.generate_tokens(profile)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client
