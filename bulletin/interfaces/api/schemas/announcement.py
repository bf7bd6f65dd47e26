"""Pydantic models describing operator announcements."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bulletin.domain.entities import AnnouncementContent


class AnnouncementCreate(BaseModel):
    """Payload used to broadcast a new announcement."""

    title: str = Field(..., min_length=1, max_length=200, description="Título del anuncio")
    message: str = Field(..., min_length=1, description="Contenido del anuncio")
    action_url: str | None = Field(
        default=None, max_length=500, description="Enlace opcional asociado al anuncio"
    )
    send_to_all: bool = Field(
        default=False,
        description="Si es verdadero se envía a todos los miembros aprobados",
    )
    recipient_ids: list[int] = Field(
        default_factory=list,
        description="Destinatarios explícitos cuando no se envía a todos",
    )

    @model_validator(mode="after")
    def _strip_content(self) -> "AnnouncementCreate":
        content = AnnouncementContent.compose(self.title, self.message, self.action_url)
        self.title = content.title
        self.message = content.message
        self.action_url = content.action_url
        return self


class AnnouncementSendResponse(BaseModel):
    recipient_count: int


class AnnouncementDeleteResponse(BaseModel):
    deleted_count: int


class AnnouncementSummaryRead(BaseModel):
    """Logical announcement with its aggregate read counters."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    message: str
    action_url: str | None = None
    sender_id: int | None = None
    sent_at: datetime | None = None
    total_recipients: int
    read_count: int
    unread_count: int


class RecipientProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    display_name: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    avatar_url: str | None = None
    business_name: str | None = None


class AnnouncementRecipientRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    notification_id: int
    recipient_id: int
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime | None = None
    profile: RecipientProfileRead | None = None


class AnnouncementDetailRead(BaseModel):
    """Announcement together with every recipient copy."""

    model_config = ConfigDict(from_attributes=True)

    summary: AnnouncementSummaryRead
    recipients: list[AnnouncementRecipientRead] = Field(default_factory=list)


__all__ = [
    "AnnouncementCreate",
    "AnnouncementDeleteResponse",
    "AnnouncementDetailRead",
    "AnnouncementRecipientRead",
    "AnnouncementSendResponse",
    "AnnouncementSummaryRead",
    "RecipientProfileRead",
]
