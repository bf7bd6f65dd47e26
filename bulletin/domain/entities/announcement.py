"""Domain views describing operator announcements.

An announcement is never stored as such: it is the set of ``system_message``
notifications sharing the same sender and content. These dataclasses are the
read-time views built from those copies.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class AnnouncementContent:
    """Title, body and optional link composed by the operator."""

    title: str
    message: str
    action_url: str | None = None

    @classmethod
    def compose(
        cls, title: str, message: str, action_url: str | None = None
    ) -> "AnnouncementContent":
        """Return trimmed content, rejecting a blank title or message."""

        title = (title or "").strip()
        message = (message or "").strip()
        if not title or not message:
            raise ValueError("El título y el mensaje son obligatorios")
        return cls(
            title=title, message=message, action_url=(action_url or "").strip() or None
        )


@dataclass(frozen=True)
class RecipientSelection:
    """Target of a broadcast: every eligible member or an explicit list."""

    send_to_all: bool
    user_ids: frozenset[int] = frozenset()

    @classmethod
    def everyone(cls) -> "RecipientSelection":
        return cls(send_to_all=True)

    @classmethod
    def explicit(cls, user_ids: Iterable[int]) -> "RecipientSelection":
        return cls(send_to_all=False, user_ids=frozenset(user_ids))


@dataclass(frozen=True)
class BroadcastResult:
    """Outcome of a successful fan-out."""

    recipient_count: int
    group_key: str


@dataclass
class RecipientStats:
    """Read counters for the members of one announcement group."""

    total_recipients: int = 0
    read_count: int = 0

    @property
    def unread_count(self) -> int:
        return self.total_recipients - self.read_count


@dataclass
class AnnouncementSummary:
    """Logical announcement with aggregate read statistics."""

    id: int
    group_key: str
    title: str
    message: str
    action_url: str | None
    sender_id: int | None
    sent_at: datetime | None
    total_recipients: int = 0
    read_count: int = 0
    unread_count: int = 0

    def apply_stats(self, stats: RecipientStats) -> None:
        self.total_recipients = stats.total_recipients
        self.read_count = stats.read_count
        self.unread_count = stats.unread_count


@dataclass(frozen=True)
class RecipientProfile:
    """Denormalized directory data shown next to each recipient."""

    id: int
    email: str
    display_name: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    avatar_url: str | None = None
    business_name: str | None = None


@dataclass(frozen=True)
class AnnouncementRecipient:
    """One member copy of an announcement."""

    notification_id: int
    recipient_id: int
    is_read: bool
    read_at: datetime | None
    created_at: datetime | None
    profile: RecipientProfile | None


@dataclass
class AnnouncementDetail:
    """Announcement summary together with its full recipient list."""

    summary: AnnouncementSummary
    recipients: list[AnnouncementRecipient] = field(default_factory=list)


__all__ = [
    "AnnouncementContent",
    "AnnouncementDetail",
    "AnnouncementRecipient",
    "AnnouncementSummary",
    "BroadcastResult",
    "RecipientProfile",
    "RecipientSelection",
    "RecipientStats",
]
