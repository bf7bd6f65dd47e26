"""Domain entities exposed by the application."""

from .announcement import (
    AnnouncementContent,
    AnnouncementDetail,
    AnnouncementRecipient,
    AnnouncementSummary,
    BroadcastResult,
    RecipientProfile,
    RecipientSelection,
    RecipientStats,
)
from .notification import (
    ANNOUNCEMENT_KIND,
    NOTIFICATION_KIND_FRIEND_REQUEST,
    NOTIFICATION_KIND_SYSTEM_MESSAGE,
    Notification,
    NotificationFilter,
)
from .role import ROLE_ADMIN, ROLE_MEMBER, Role
from .user import (
    APPROVAL_STATUS_APPROVED,
    APPROVAL_STATUS_PENDING,
    APPROVAL_STATUS_REJECTED,
    User,
    get_user_display_name,
)

__all__ = [
    "ANNOUNCEMENT_KIND",
    "APPROVAL_STATUS_APPROVED",
    "APPROVAL_STATUS_PENDING",
    "APPROVAL_STATUS_REJECTED",
    "AnnouncementContent",
    "AnnouncementDetail",
    "AnnouncementRecipient",
    "AnnouncementSummary",
    "BroadcastResult",
    "NOTIFICATION_KIND_FRIEND_REQUEST",
    "NOTIFICATION_KIND_SYSTEM_MESSAGE",
    "Notification",
    "NotificationFilter",
    "ROLE_ADMIN",
    "ROLE_MEMBER",
    "RecipientProfile",
    "RecipientSelection",
    "RecipientStats",
    "Role",
    "User",
    "get_user_display_name",
]
