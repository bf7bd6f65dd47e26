"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from bulletin.infrastructure.database import Base
from bulletin.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation of one notification delivered to one user."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_event_type_created_at", "event_type", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    action_url = Column(String(500), nullable=True)
    sender_id = Column(Integer, nullable=True, index=True)
    group_key = Column(String(96), nullable=True, index=True)
    payload = Column(JSON, nullable=False, default=dict)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    is_archived = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    read_at = Column(DateTime(), nullable=True)

    user = relationship("UserModel", lazy="joined")


__all__ = ["NotificationModel"]
