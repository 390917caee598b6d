"""Session lifecycle simulation on top of an ``AuthProvider``.

``LOGGED_OUT`` -> sign_in / sign_up -> ``LOGGED_IN(profile)`` -> sign_out ->
``LOGGED_OUT``. A session holds at most one profile; a rejected sign-in
leaves the session exactly as it was.
"""

import enum
import logging

from .exceptions import AuthenticationError
from .profiles import Profile
from .providers import AuthProvider, get_auth_provider

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    LOGGED_OUT = "loggedOut"
    LOGGED_IN = "loggedIn"


class AuthSession:
    """One client's view of who is signed in."""

    def __init__(self, provider: AuthProvider | None = None):
        self.provider = provider or get_auth_provider()
        self._profile: Profile | None = None

    @property
    def state(self) -> SessionState:
        return SessionState.LOGGED_IN if self._profile else SessionState.LOGGED_OUT

    def current_profile(self) -> Profile | None:
        return self._profile

    def is_admin(self) -> bool:
        return bool(self._profile and self._profile.is_admin)

    async def sign_in(self, username: str, password: str) -> Profile:
        """Authenticate and bind the profile to this session.

        Raises ``AuthenticationError`` on bad credentials without touching
        the current state.
        """
        logger.info("Sign-in attempt for %s", username)
        try:
            profile = await self.provider.authenticate(username, password)
        except AuthenticationError:
            logger.warning("Sign-in failed for %s", username)
            raise
        self._profile = profile
        return profile

    async def sign_up(self, username: str, password: str) -> Profile:
        """Register a new profile and sign in as it straight away."""
        profile = await self.provider.register(username, password)
        self._profile = profile
        return profile

    async def sign_out(self) -> None:
        self._profile = None

    async def refresh_profile(self) -> Profile | None:
        """Reload the bound profile; drops the session if it no longer exists."""
        if self._profile is None:
            return None
        self._profile = await self.provider.get_profile(self._profile.id)
        return self._profile


__all__ = ["AuthSession", "SessionState"]
