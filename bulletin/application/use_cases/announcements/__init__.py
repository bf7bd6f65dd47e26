"""Use cases for operator announcements."""

from .fan_out import build_announcement_copies, fan_out
from .group_operations import delete_announcement, get_announcement_detail
from .list_announcements import group_announcements, list_announcements
from .list_candidates import list_announcement_candidates
from .recipients import EligibilityDirectory, resolve_recipients
from .send_announcement import send_announcement
from .stats import (
    GroupedCountStrategy,
    PerGroupScanStrategy,
    RecipientStatsStrategy,
    get_stats_strategy,
)

__all__ = [
    "EligibilityDirectory",
    "GroupedCountStrategy",
    "PerGroupScanStrategy",
    "RecipientStatsStrategy",
    "build_announcement_copies",
    "delete_announcement",
    "fan_out",
    "get_announcement_detail",
    "get_stats_strategy",
    "group_announcements",
    "list_announcement_candidates",
    "list_announcements",
    "resolve_recipients",
    "send_announcement",
]
