"""Use cases for a member's notification inbox."""

from .inbox import archive_notification, list_user_notifications, mark_notifications_read

__all__ = [
    "archive_notification",
    "list_user_notifications",
    "mark_notifications_read",
]
