"""Authentication endpoints: register, login, refresh, logout, and profile."""

from typing import Any

from asgiref.sync import async_to_sync
from django.http import JsonResponse
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.response import Response
from rest_framework.views import APIView

from core.response import BaseAPIView, api_response
from .exceptions import AuthenticationError
from .providers import get_auth_provider
from .serializers import LoginSerializer, ProfileSerializer, RefreshSerializer, RegisterSerializer
from .services import TokenService
from .session import AuthSession


def _token_pair(profile) -> dict[str, Any]:
    access, refresh = TokenService.generate_tokens(profile)
    return {"access": access, "refresh": refresh, "profile": ProfileSerializer(profile).data}


class RegisterView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Register a new profile and sign it in immediately."""
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = AuthSession(get_auth_provider())
        profile = async_to_sync(session.sign_up)(
            serializer.validated_data["username"], serializer.validated_data["password"]
        )
        return api_response(_token_pair(profile), status=status.HTTP_201_CREATED)


class LoginView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Authenticate and issue access + refresh tokens."""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = AuthSession(get_auth_provider())
        try:
            profile = async_to_sync(session.sign_in)(
                serializer.validated_data["username"], serializer.validated_data["password"]
            )
        except AuthenticationError as exc:
            raise AuthenticationFailed(str(exc)) from exc
        return api_response(_token_pair(profile))


class RefreshView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Exchange a valid refresh token for new access/refresh tokens."""
        serializer = RefreshSerializer(data=request.data)
        if not serializer.is_valid():
            raise AuthenticationFailed("Refresh token required")

        payload = TokenService.decode_token(serializer.validated_data["refresh"], expected_type="refresh")
        jti = payload.get("jti")
        if not jti or TokenService.is_token_blocked(jti):
            raise AuthenticationFailed("Invalid or revoked refresh token")

        profile = async_to_sync(get_auth_provider().get_profile)(payload.get("sub"))
        if profile is None:
            raise AuthenticationFailed("User not found or inactive")

        # Rotate: the old refresh token cannot be replayed.
        TokenService.block_token(jti, payload["exp"])
        return api_response(_token_pair(profile))


class LogoutView(APIView):
    """End the session by blocklisting the current access token's jti."""

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Blocklist the bearer access token and return 204 No Content."""
        token = _get_bearer_token(request)
        if not token:
            return JsonResponse({"data": None, "errors": ["Missing token."]}, status=401)

        payload = TokenService.decode_token(token, expected_type="access")
        TokenService.block_token(payload["jti"], payload["exp"])
        # 204 responses must not include a body.
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Return the current profile."""
        if not request.user.is_authenticated:
            raise AuthenticationFailed("Authentication required")
        return api_response(ProfileSerializer(request.user).data)


def _get_bearer_token(request) -> str | None:
    """Extract the Bearer token from Authorization header if present."""
    auth_header = request.META.get("HTTP_AUTHORIZATION", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1]
    return None
