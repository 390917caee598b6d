"""Identity providers behind the session simulation.

``MockAuthProvider`` keeps users in memory and is seeded with a single admin
account; ``DatabaseAuthProvider`` stores them in the ``User`` table. Both
apply the same rule for roles: the first profile ever registered becomes the
admin, later ones are regular users.
"""

import asyncio
import logging
import secrets
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass

from asgiref.sync import sync_to_async
from django.conf import settings
from django.db import IntegrityError
from django.utils import timezone

from .exceptions import AuthenticationError, RegistrationError
from .models import User
from .profiles import ROLE_ADMIN, ROLE_USER, Profile
from .serializers import RegisterSerializer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid login credentials"
ALREADY_REGISTERED = "User already registered"

MOCK_ADMIN_USERNAME = "admin"
MOCK_ADMIN_PASSWORD = "admin123"


def _clean_registration(username: str, password: str) -> tuple[str, str]:
    serializer = RegisterSerializer(data={"username": username, "password": password})
    if not serializer.is_valid():
        raise RegistrationError(
            {field: [str(message) for message in messages] for field, messages in serializer.errors.items()}
        )
    return serializer.validated_data["username"], serializer.validated_data["password"]


def _email_for(username: str) -> str:
    return f"{username}@{settings.AUTH_EMAIL_DOMAIN}"


class AuthProvider(ABC):
    """Async identity operations used by ``AuthSession`` and the auth views."""

    @abstractmethod
    async def authenticate(self, username: str, password: str) -> Profile:
        """Return the profile for valid credentials or raise AuthenticationError."""

    @abstractmethod
    async def register(self, username: str, password: str) -> Profile:
        """Create a profile or raise RegistrationError."""

    @abstractmethod
    async def get_profile(self, profile_id: str) -> Profile | None:
        """Look up an active profile by id."""


@dataclass
class _MockAccount:
    profile: Profile
    password: str


class MockAuthProvider(AuthProvider):
    """In-memory accounts; starts with ``admin`` / ``admin123``."""

    def __init__(self, delay_ms: int | None = None, seed: bool = True):
        if delay_ms is None:
            delay_ms = settings.MOCK_DELAY_MS
        self.delay = max(0, delay_ms) / 1000
        # Keyed by lower-cased username so uniqueness ignores case.
        self._accounts: dict[str, _MockAccount] = {}
        self._last_id = 0
        if seed:
            self._add_account(MOCK_ADMIN_USERNAME, MOCK_ADMIN_PASSWORD, ROLE_ADMIN)

    def _add_account(self, username: str, password: str, role: str) -> Profile:
        self._last_id += 1
        profile = Profile(
            id=str(self._last_id),
            username=username,
            email=_email_for(username),
            role=role,
            created_at=timezone.now(),
        )
        self._accounts[username.lower()] = _MockAccount(profile=profile, password=password)
        return profile

    async def authenticate(self, username: str, password: str) -> Profile:
        await asyncio.sleep(self.delay)
        account = self._accounts.get(str(username).lower())
        if account is None or not secrets.compare_digest(account.password.encode(), str(password).encode()):
            raise AuthenticationError(INVALID_CREDENTIALS)
        return account.profile

    async def register(self, username: str, password: str) -> Profile:
        username, password = _clean_registration(username, password)
        await asyncio.sleep(self.delay)
        if username.lower() in self._accounts:
            raise RegistrationError({"username": [ALREADY_REGISTERED]})
        role = ROLE_USER if self._accounts else ROLE_ADMIN
        profile = self._add_account(username, password, role)
        logger.info("Registered mock profile %s as %s", profile.username, profile.role)
        return profile

    async def get_profile(self, profile_id: str) -> Profile | None:
        await asyncio.sleep(self.delay)
        for account in self._accounts.values():
            if account.profile.id == str(profile_id):
                return account.profile
        return None


class DatabaseAuthProvider(AuthProvider):
    """Accounts persisted in ``authentication.User`` with bcrypt hashes."""

    async def authenticate(self, username: str, password: str) -> Profile:
        try:
            user = await User.objects.aget(username__iexact=username)
        except User.DoesNotExist:
            raise AuthenticationError(INVALID_CREDENTIALS) from None

        if not user.is_active:
            raise AuthenticationError("User is inactive")

        # bcrypt is CPU-bound; keep it off the event loop.
        if not await sync_to_async(user.check_password)(password):
            raise AuthenticationError(INVALID_CREDENTIALS)

        return user.to_profile()

    async def register(self, username: str, password: str) -> Profile:
        username, password = _clean_registration(username, password)
        if await User.objects.filter(username__iexact=username).aexists():
            raise RegistrationError({"username": [ALREADY_REGISTERED]})

        role = User.Role.USER if await User.objects.aexists() else User.Role.ADMIN
        try:
            user = await User.objects.acreate_user(
                username=username,
                password=password,
                email=_email_for(username),
                role=role,
            )
        except IntegrityError:
            # Lost a race against a concurrent sign-up with the same name.
            raise RegistrationError({"username": [ALREADY_REGISTERED]}) from None

        logger.info("Registered profile %s as %s", user.username, user.role)
        return user.to_profile()

    async def get_profile(self, profile_id: str) -> Profile | None:
        try:
            pk = uuid.UUID(str(profile_id))
        except ValueError:
            return None
        try:
            user = await User.objects.aget(pk=pk, is_active=True)
        except User.DoesNotExist:
            return None
        return user.to_profile()


_provider: AuthProvider | None = None


def build_auth_provider() -> AuthProvider:
    """Instantiate the provider matching ``settings.USE_MOCK_DATA``."""

    if settings.USE_MOCK_DATA:
        return MockAuthProvider()
    return DatabaseAuthProvider()


def get_auth_provider() -> AuthProvider:
    """Return the process-wide provider, building it on first use."""

    global _provider
    if _provider is None:
        _provider = build_auth_provider()
    return _provider


__all__ = [
    "AuthProvider",
    "DatabaseAuthProvider",
    "MOCK_ADMIN_PASSWORD",
    "MOCK_ADMIN_USERNAME",
    "MockAuthProvider",
    "build_auth_provider",
    "get_auth_provider",
]
