"""Use case for listing the members an operator can address."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from bulletin.domain.entities import User
from bulletin.infrastructure.repositories import UserRepository


def list_announcement_candidates(session: Session) -> Sequence[User]:
    """Return approved members, newest first."""

    return UserRepository(session).list_approved()


__all__ = ["list_announcement_candidates"]
