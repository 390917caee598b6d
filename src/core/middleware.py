"""Middleware to authenticate requests via JWT and Redis blocklist."""

import logging
from typing import Optional

from asgiref.sync import async_to_sync
from django.contrib.auth.models import AnonymousUser
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed

from authentication.profiles import Profile
from authentication.providers import get_auth_provider
from authentication.services import TokenService, BlocklistUnavailable

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(MiddlewareMixin):
    """Decode access JWT, check blocklist, and attach the Profile as request.user."""

    def process_request(self, request):  # type: ignore[override]
        """Authenticate request using Bearer access token if present."""
        auth_header = request.META.get("HTTP_AUTHORIZATION", "")
        if not auth_header or not auth_header.startswith("Bearer "):
            request.user = AnonymousUser()
            return None

        token = auth_header.split(" ", 1)[1]

        try:
            payload = TokenService.decode_token(token, expected_type="access")
            jti = payload.get("jti")
            if not jti:
                return _unauthorized()

            if TokenService.is_token_blocked(jti):
                return _unauthorized()

            profile = self._get_profile(payload.get("sub"))
            if profile is None:
                return _unauthorized()

            request.user = profile
            return None

        except AuthenticationFailed:
            return _unauthorized()
        except BlocklistUnavailable:
            logger.error("Token blocklist unreachable; rejecting request")
            return _service_unavailable()

    @staticmethod
    def _get_profile(profile_id: Optional[str]) -> Optional[Profile]:
        if not profile_id:
            return None
        return async_to_sync(get_auth_provider().get_profile)(profile_id)


def _unauthorized() -> JsonResponse:
    return JsonResponse(
        {
            "data": None,
            "errors": [
                "Authentication credentials were not provided or are invalid, token revoked, or user is inactive."
            ],
        },
        status=status.HTTP_401_UNAUTHORIZED,
    )


def _service_unavailable() -> JsonResponse:
    return JsonResponse(
        {"data": None, "errors": ["Authentication service unavailable (blocklist)."]},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


__all__ = ["JWTAuthMiddleware"]
