"""Domain entity representing a per-recipient notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_KIND_SYSTEM_MESSAGE = "system_message"
NOTIFICATION_KIND_FRIEND_REQUEST = "friend_request"

# Kind used for every copy of an operator broadcast.
ANNOUNCEMENT_KIND = NOTIFICATION_KIND_SYSTEM_MESSAGE


@dataclass
class Notification:
    """Information message delivered to a specific user.

    Announcement copies additionally carry ``sender_id`` and ``group_key``;
    the key is derived from the sender and content and never set by callers
    directly.
    """

    id: int | None
    user_id: int
    event_type: str
    title: str
    message: str
    action_url: str | None = None
    sender_id: int | None = None
    group_key: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    is_archived: bool = False
    created_at: datetime | None = None
    read_at: datetime | None = None

    def is_announcement(self) -> bool:
        return self.event_type == ANNOUNCEMENT_KIND


@dataclass(frozen=True)
class NotificationFilter:
    """Equality filter applied to notification scans and deletes.

    ``None`` attributes are not constrained, except ``sender_id`` when
    ``exact_sender`` is set: a missing sender then only matches records
    without one.
    """

    event_type: str
    title: str | None = None
    message: str | None = None
    sender_id: int | None = None
    exact_sender: bool = False

    @classmethod
    def for_group(
        cls, event_type: str, *, sender_id: int | None, title: str, message: str
    ) -> "NotificationFilter":
        """Match exactly the copies sharing sender, title and message."""

        return cls(
            event_type=event_type,
            title=title,
            message=message,
            sender_id=sender_id,
            exact_sender=True,
        )


__all__ = [
    "ANNOUNCEMENT_KIND",
    "NOTIFICATION_KIND_FRIEND_REQUEST",
    "NOTIFICATION_KIND_SYSTEM_MESSAGE",
    "Notification",
    "NotificationFilter",
]
