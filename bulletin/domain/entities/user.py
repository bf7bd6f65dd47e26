"""Domain entity representing a member of the directory."""

from dataclasses import dataclass
from datetime import datetime

from .role import ROLE_ADMIN, Role

APPROVAL_STATUS_PENDING = "pending"
APPROVAL_STATUS_APPROVED = "approved"
APPROVAL_STATUS_REJECTED = "rejected"


@dataclass
class User:
    """Core attributes describing a directory member or operator."""

    id: int | None
    role: Role
    email: str
    password: str
    first_name: str
    last_name: str | None = None
    phone: str | None = None
    avatar_url: str | None = None
    business_name: str | None = None
    approval_status: str = APPROVAL_STATUS_PENDING
    is_active: bool = True
    deleted: bool = False
    created_at: datetime | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role.alias.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)


def get_user_display_name(user: User) -> str:
    """Return the label shown for ``user`` in recipient listings.

    Business accounts are shown by business name; otherwise the full name,
    then the local part of the e-mail address.
    """

    if user.business_name:
        return user.business_name
    full_name = f"{user.first_name or ''} {user.last_name or ''}".strip()
    if full_name:
        return full_name
    local_part = (user.email or "").split("@")[0]
    return local_part or "User"


__all__ = [
    "APPROVAL_STATUS_APPROVED",
    "APPROVAL_STATUS_PENDING",
    "APPROVAL_STATUS_REJECTED",
    "User",
    "get_user_display_name",
]
