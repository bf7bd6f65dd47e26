from .announcement import (
    AnnouncementCreate,
    AnnouncementDeleteResponse,
    AnnouncementDetailRead,
    AnnouncementRecipientRead,
    AnnouncementSendResponse,
    AnnouncementSummaryRead,
    RecipientProfileRead,
)
from .auth import Token
from .notification import NotificationMarkReadRequest, NotificationRead
from .user import CandidateRead

__all__ = [
    "AnnouncementCreate",
    "AnnouncementDeleteResponse",
    "AnnouncementDetailRead",
    "AnnouncementRecipientRead",
    "AnnouncementSendResponse",
    "AnnouncementSummaryRead",
    "CandidateRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "RecipientProfileRead",
    "Token",
]
