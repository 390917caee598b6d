"""Custom exception handling to enforce the API error envelope."""

import logging
from typing import Any

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from articles.exceptions import NotFound, ValidationFailure
from authentication.exceptions import AuthenticationError, RegistrationError
from authentication.services import BlocklistUnavailable

logger = logging.getLogger(__name__)


def _normalize_errors(payload: Any) -> list[Any]:
    """Convert DRF's response.data into a list for the envelope."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "detail" in payload:
        # Common DRF pattern: {"detail": "..."}
        return [payload["detail"]]
    return [payload]


def _envelope_error(errors: list[Any], status_code: int) -> Response:
    return Response({"data": None, "errors": errors}, status=status_code)


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Wrap errors in `{ "data": null, "errors": [...] }` shape.

    - Maps the content store and auth provider errors to 404/400/401.
    - Uses DRF's default handler to produce the base response for the rest.
    - Optionally exposes more detailed auth errors when DEBUG_AUTH_ERRORS is enabled.
    """

    if isinstance(exc, NotFound):
        return _envelope_error([str(exc)], status.HTTP_404_NOT_FOUND)

    if isinstance(exc, (ValidationFailure, RegistrationError)):
        return _envelope_error([exc.errors], status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, AuthenticationError):
        exc = AuthenticationFailed(str(exc))

    # Blocklist connectivity errors are security-critical and must fail-closed with 503.
    if isinstance(exc, BlocklistUnavailable):
        logger.error("Token blocklist unavailable: %s", exc)
        return _envelope_error(
            ["Authentication service unavailable (blocklist)."], status.HTTP_503_SERVICE_UNAVAILABLE
        )

    # Store failures are a temporary outage; keep the envelope instead of
    # Django's HTML 500 page.
    if isinstance(exc, DatabaseError):
        logger.exception("Database error while handling %s", context.get("view").__class__.__name__)
        return _envelope_error(["Service temporarily unavailable."], status.HTTP_503_SERVICE_UNAVAILABLE)

    response = drf_exception_handler(exc, context)

    if response is None:
        return response

    # DRF answers 403 when no authenticator offers a WWW-Authenticate header;
    # auth failures are always reported as 401 here.
    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    # Successful responses are untouched here; BaseAPIView/BaseViewSet handle them.
    if response.status_code >= 400:
        base_errors = response.data

        if response.status_code == status.HTTP_401_UNAUTHORIZED:
            if getattr(settings, "DEBUG_AUTH_ERRORS", False):
                # Surface the specific message (e.g. "Token has expired").
                errors = _normalize_errors(base_errors)
            else:
                errors = [
                    "Authentication credentials were not provided or are invalid, "
                    "token revoked, or user is inactive."
                ]
        elif response.status_code == status.HTTP_403_FORBIDDEN:
            errors = [
                "You do not have permission to perform this action on this resource."
            ]
        else:
            errors = _normalize_errors(base_errors)

        response.data = {"data": None, "errors": errors}

    return response
