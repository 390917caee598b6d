"""Permission class gating the admin back-office endpoints."""

from rest_framework import permissions

from .profiles import ROLE_ADMIN


class IsAdminProfile(permissions.BasePermission):
    """Allow only authenticated profiles whose role is ``admin``."""

    message = "You do not have permission to perform this action on this resource."

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if not user or not getattr(user, "is_authenticated", False):
            return False
        return getattr(user, "role", None) == ROLE_ADMIN


__all__ = ["IsAdminProfile"]
