"""Errors raised by the auth providers and the session simulation."""

from typing import Any


class AuthenticationError(Exception):
    """Credentials were rejected; the session stays as it was."""


class RegistrationError(Exception):
    """Sign-up rejected (taken username, malformed username or short password)."""

    def __init__(self, errors: dict[str, list[Any]]):
        self.errors = errors
        super().__init__("Registration failed")


__all__ = ["AuthenticationError", "RegistrationError"]
