"""DRF authenticator that reuses the profile resolved by ``JWTAuthMiddleware``.

Bearer tokens are decoded once, in the middleware; DRF views then see the
same ``Profile`` through ``request.user`` without a second lookup.
"""

from typing import Optional, Tuple

from rest_framework.authentication import BaseAuthentication

from authentication.profiles import Profile


class MiddlewareUserAuthentication(BaseAuthentication):
    """Expose the ``Profile`` attached to ``request._request`` to DRF.

    Anything other than a profile (an ``AnonymousUser`` or nothing at all)
    means the request is unauthenticated and the authenticator steps aside.
    """

    def authenticate(self, request) -> Optional[Tuple[Profile, None]]:
        # DRF's Request wraps the original Django HttpRequest as ``._request``.
        django_request = getattr(request, "_request", None)
        user = getattr(django_request, "user", None)
        if not isinstance(user, Profile):
            return None
        return user, None


__all__ = ["MiddlewareUserAuthentication"]
