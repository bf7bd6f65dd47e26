"""Domain entity representing a user role."""

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"


@dataclass
class Role:
    """Role assigned to a user; the alias drives authorization checks."""

    id: int
    name: str
    alias: str


__all__ = ["ROLE_ADMIN", "ROLE_MEMBER", "Role"]
