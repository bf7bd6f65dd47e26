"""Strategies computing read statistics for announcement groups.

The grouping of notifications into announcements is independent from how
their counters are computed, so the counting step can be swapped without
touching the listing logic.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from bulletin.domain.entities import (
    ANNOUNCEMENT_KIND,
    AnnouncementSummary,
    NotificationFilter,
    RecipientStats,
)
from bulletin.infrastructure.repositories import NotificationRepository

STRATEGY_PER_GROUP = "per_group"
STRATEGY_GROUPED = "grouped"


class RecipientStatsStrategy(Protocol):
    """Compute :class:`RecipientStats` for each summary, keyed by group key."""

    def collect(
        self,
        repository: NotificationRepository,
        summaries: Sequence[AnnouncementSummary],
    ) -> dict[str, RecipientStats]: ...


class PerGroupScanStrategy:
    """Issue one scan per announcement group and count its members."""

    def collect(
        self,
        repository: NotificationRepository,
        summaries: Sequence[AnnouncementSummary],
    ) -> dict[str, RecipientStats]:
        stats: dict[str, RecipientStats] = {}
        for summary in summaries:
            members = repository.scan(
                NotificationFilter.for_group(
                    ANNOUNCEMENT_KIND,
                    sender_id=summary.sender_id,
                    title=summary.title,
                    message=summary.message,
                ),
                newest_first=False,
            )
            stats[summary.group_key] = RecipientStats(
                total_recipients=len(members),
                read_count=sum(1 for member in members if member.is_read),
            )
        return stats


class GroupedCountStrategy:
    """Fetch the counters of every group with a single aggregate query."""

    def collect(
        self,
        repository: NotificationRepository,
        summaries: Sequence[AnnouncementSummary],
    ) -> dict[str, RecipientStats]:
        if not summaries:
            return {}
        counts = repository.count_read_by_content(ANNOUNCEMENT_KIND)
        stats: dict[str, RecipientStats] = {}
        for summary in summaries:
            total, read = counts.get(
                (summary.sender_id, summary.title, summary.message), (0, 0)
            )
            stats[summary.group_key] = RecipientStats(
                total_recipients=total, read_count=read
            )
        return stats


_STRATEGIES: dict[str, type[RecipientStatsStrategy]] = {
    STRATEGY_PER_GROUP: PerGroupScanStrategy,
    STRATEGY_GROUPED: GroupedCountStrategy,
}


def get_stats_strategy(name: str) -> RecipientStatsStrategy:
    """Return the strategy registered under ``name``."""

    try:
        return _STRATEGIES[name]()
    except KeyError as exc:
        raise ValueError(f"Unknown announcement stats strategy '{name}'") from exc


__all__ = [
    "GroupedCountStrategy",
    "PerGroupScanStrategy",
    "RecipientStatsStrategy",
    "STRATEGY_GROUPED",
    "STRATEGY_PER_GROUP",
    "get_stats_strategy",
]
