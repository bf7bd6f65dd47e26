"""Use cases acting on every copy of one announcement."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from bulletin.domain.entities import (
    ANNOUNCEMENT_KIND,
    AnnouncementDetail,
    AnnouncementRecipient,
    AnnouncementSummary,
    Notification,
    NotificationFilter,
    RecipientProfile,
    RecipientStats,
    User,
    get_user_display_name,
)
from bulletin.domain.errors import AnnouncementNotFoundError
from bulletin.domain.grouping import derive_group_key
from bulletin.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def _load_representative(
    repository: NotificationRepository, notification_id: int
) -> Notification:
    notification = repository.get(notification_id)
    if notification is None or not notification.is_announcement():
        raise AnnouncementNotFoundError(notification_id)
    return notification


def _group_filter(notification: Notification) -> NotificationFilter:
    return NotificationFilter.for_group(
        ANNOUNCEMENT_KIND,
        sender_id=notification.sender_id,
        title=notification.title,
        message=notification.message,
    )


def _to_profile(user: User | None) -> RecipientProfile | None:
    if user is None or user.id is None:
        return None
    return RecipientProfile(
        id=user.id,
        email=user.email,
        display_name=get_user_display_name(user),
        first_name=user.first_name,
        last_name=user.last_name,
        phone=user.phone,
        avatar_url=user.avatar_url,
        business_name=user.business_name,
    )


def get_announcement_detail(
    session: Session, notification_id: int
) -> AnnouncementDetail:
    """Return the announcement represented by ``notification_id`` and its recipients."""

    repository = NotificationRepository(session)
    representative = _load_representative(repository, notification_id)
    members = repository.scan_with_recipients(_group_filter(representative))

    recipients = [
        AnnouncementRecipient(
            notification_id=notification.id or 0,
            recipient_id=notification.user_id,
            is_read=notification.is_read,
            read_at=notification.read_at,
            created_at=notification.created_at,
            profile=_to_profile(user),
        )
        for notification, user in members
    ]
    recipients.sort(
        key=lambda item: (
            item.profile.display_name.lower() if item.profile else "",
            item.recipient_id,
        )
    )

    summary = AnnouncementSummary(
        id=representative.id or notification_id,
        group_key=derive_group_key(
            representative.sender_id, representative.title, representative.message
        ),
        title=representative.title,
        message=representative.message,
        action_url=representative.action_url,
        sender_id=representative.sender_id,
        sent_at=representative.created_at,
    )
    summary.apply_stats(
        RecipientStats(
            total_recipients=len(recipients),
            read_count=sum(1 for recipient in recipients if recipient.is_read),
        )
    )
    return AnnouncementDetail(summary=summary, recipients=recipients)


def delete_announcement(session: Session, notification_id: int) -> int:
    """Delete every copy of the announcement represented by ``notification_id``.

    Returns the number of deleted notifications. Copies inserted after the
    delete filter runs are not affected.
    """

    repository = NotificationRepository(session)
    representative = _load_representative(repository, notification_id)
    deleted = repository.delete_where(_group_filter(representative))
    logger.info(
        "Deleted %s copies of announcement %s",
        deleted,
        derive_group_key(
            representative.sender_id, representative.title, representative.message
        ),
    )
    return deleted


__all__ = ["delete_announcement", "get_announcement_detail"]
