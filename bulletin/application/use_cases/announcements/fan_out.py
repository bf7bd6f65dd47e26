"""Fan-out of one announcement into per-recipient notifications."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from bulletin.domain.entities import ANNOUNCEMENT_KIND, AnnouncementContent, Notification
from bulletin.domain.errors import StoreError, WriteFailedError
from bulletin.domain.grouping import derive_group_key
from bulletin.infrastructure.repositories import NotificationRepository
from bulletin.utils import now_in_app_timezone


def build_announcement_copies(
    recipients: Iterable[int],
    content: AnnouncementContent,
    *,
    sender_id: int,
    sent_at: datetime | None = None,
) -> list[Notification]:
    """Return one unread notification per recipient, all sharing a group key."""

    sent_at = sent_at or now_in_app_timezone()
    group_key = derive_group_key(sender_id, content.title, content.message)
    payload = {"announcement": True, "sent_at": sent_at.isoformat()}
    return [
        Notification(
            id=None,
            user_id=recipient_id,
            event_type=ANNOUNCEMENT_KIND,
            title=content.title,
            message=content.message,
            action_url=content.action_url,
            sender_id=sender_id,
            group_key=group_key,
            payload=dict(payload),
            is_read=False,
            is_archived=False,
            created_at=sent_at,
        )
        for recipient_id in sorted(recipients)
    ]


def fan_out(
    repository: NotificationRepository,
    recipients: Iterable[int],
    content: AnnouncementContent,
    *,
    sender_id: int,
) -> list[Notification]:
    """Persist the copies of an announcement as a single batch."""

    copies = build_announcement_copies(recipients, content, sender_id=sender_id)
    try:
        return repository.insert_batch(copies)
    except StoreError as exc:
        raise WriteFailedError(
            f"Could not store the announcement for {len(copies)} recipients"
        ) from exc


__all__ = ["build_announcement_copies", "fan_out"]
