"""Recipient-side operations on a member's own notifications."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from bulletin.domain.entities import Notification
from bulletin.infrastructure.repositories import NotificationRepository


def list_user_notifications(
    session: Session,
    *,
    user_id: int,
    unread_only: bool = False,
    include_archived: bool = False,
    limit: int | None = 50,
) -> Sequence[Notification]:
    """Return the most recent notifications delivered to ``user_id``."""

    return NotificationRepository(session).list_for_user(
        user_id,
        unread_only=unread_only,
        include_archived=include_archived,
        limit=limit,
    )


def mark_notifications_read(
    session: Session, *, user_id: int, notification_ids: Iterable[int]
) -> int:
    """Flag the given notifications of ``user_id`` as read.

    Ids belonging to other users are ignored. Returns how many changed.
    """

    return NotificationRepository(session).mark_as_read(
        notification_ids, user_id=user_id
    )


def archive_notification(session: Session, *, user_id: int, notification_id: int) -> None:
    if not NotificationRepository(session).set_archived(
        notification_id, user_id=user_id, archived=True
    ):
        raise ValueError("Notificación no encontrada")


__all__ = [
    "archive_notification",
    "list_user_notifications",
    "mark_notifications_read",
]
