"""Use case for listing sent announcements with their read statistics."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from bulletin.config import get_settings
from bulletin.domain.entities import (
    ANNOUNCEMENT_KIND,
    AnnouncementSummary,
    Notification,
    NotificationFilter,
)
from bulletin.domain.errors import AggregationFailedError, StoreError
from bulletin.domain.grouping import derive_group_key
from bulletin.infrastructure.repositories import NotificationRepository

from .stats import RecipientStatsStrategy, get_stats_strategy

logger = logging.getLogger(__name__)


def group_announcements(
    notifications: Sequence[Notification],
) -> list[AnnouncementSummary]:
    """Fold announcement copies into one summary per group.

    ``notifications`` must be ordered newest first; the first copy seen for a
    group seeds its summary and the output keeps that order.
    """

    groups: dict[str, AnnouncementSummary] = {}
    for notification in notifications:
        group_key = derive_group_key(
            notification.sender_id, notification.title, notification.message
        )
        if group_key in groups:
            continue
        groups[group_key] = AnnouncementSummary(
            id=notification.id or 0,
            group_key=group_key,
            title=notification.title,
            message=notification.message,
            action_url=notification.action_url,
            sender_id=notification.sender_id,
            sent_at=notification.created_at,
        )
    return list(groups.values())


def list_announcements(
    session: Session,
    *,
    stats_strategy: RecipientStatsStrategy | None = None,
) -> list[AnnouncementSummary]:
    """Return logical announcements, most recent first, with read counters."""

    repository = NotificationRepository(session)
    strategy = stats_strategy or get_stats_strategy(
        get_settings().announcement_stats_strategy
    )
    try:
        copies = repository.scan(
            NotificationFilter(event_type=ANNOUNCEMENT_KIND), newest_first=True
        )
        summaries = group_announcements(copies)
        stats = strategy.collect(repository, summaries)
    except StoreError as exc:
        raise AggregationFailedError("Could not build the announcement list") from exc

    for summary in summaries:
        group_stats = stats.get(summary.group_key)
        if group_stats is not None:
            summary.apply_stats(group_stats)
    logger.debug(
        "Aggregated %s announcement copies into %s groups", len(copies), len(summaries)
    )
    return summaries


__all__ = ["group_announcements", "list_announcements"]
