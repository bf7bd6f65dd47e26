"""Aggregate application use cases."""

from .announcements import (
    delete_announcement,
    get_announcement_detail,
    list_announcements,
    send_announcement,
)
from .users import authenticate_user, create_user

__all__ = [
    "authenticate_user",
    "create_user",
    "delete_announcement",
    "get_announcement_detail",
    "list_announcements",
    "send_announcement",
]
