"""Pydantic models describing directory members."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CandidateRead(BaseModel):
    """Approved member that can be selected as an announcement recipient."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    display_name: str
    first_name: str
    last_name: str | None = None
    phone: str | None = None
    avatar_url: str | None = None
    business_name: str | None = None
    approval_status: str
    created_at: datetime | None = None


__all__ = ["CandidateRead"]
