"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Identificadores de notificaciones")

    def unique_ids(self) -> list[int]:
        """Return the identifiers without duplicates preserving order."""

        return list(dict.fromkeys(self.ids))


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    event_type: str
    title: str
    message: str
    action_url: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    is_archived: bool
    created_at: datetime
    read_at: datetime | None = None


__all__ = ["NotificationMarkReadRequest", "NotificationRead"]
