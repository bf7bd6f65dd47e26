"""Use case for broadcasting an announcement."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from bulletin.domain.entities import (
    AnnouncementContent,
    BroadcastResult,
    RecipientSelection,
    User,
)
from bulletin.domain.grouping import derive_group_key
from bulletin.infrastructure.repositories import NotificationRepository, UserRepository

from .fan_out import fan_out
from .recipients import EligibilityDirectory, resolve_recipients

logger = logging.getLogger(__name__)


def send_announcement(
    session: Session,
    *,
    sender: User,
    title: str,
    message: str,
    selection: RecipientSelection,
    action_url: str | None = None,
    directory: EligibilityDirectory | None = None,
) -> BroadcastResult:
    """Store one copy of the announcement for every approved recipient."""

    if sender.id is None:
        raise ValueError("Sender must be a persisted user")
    content = AnnouncementContent.compose(title, message, action_url)
    recipients = resolve_recipients(directory or UserRepository(session), selection)
    saved = fan_out(
        NotificationRepository(session), recipients, content, sender_id=sender.id
    )
    group_key = derive_group_key(sender.id, content.title, content.message)
    logger.info(
        "Announcement %s sent by user %s to %s recipients",
        group_key,
        sender.id,
        len(saved),
    )
    return BroadcastResult(recipient_count=len(saved), group_key=group_key)


__all__ = ["send_announcement"]
