"""The identity attached to a session, independent of where it is stored."""

from dataclasses import dataclass
from datetime import datetime

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


@dataclass(frozen=True)
class Profile:
    """Authenticated identity and role.

    Also serves as ``request.user`` for DRF, hence ``is_authenticated``.
    The role never changes once assigned.
    """

    id: str
    username: str
    email: str
    role: str
    created_at: datetime

    is_authenticated = True
    is_anonymous = False

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


__all__ = ["Profile", "ROLES", "ROLE_ADMIN", "ROLE_USER"]
