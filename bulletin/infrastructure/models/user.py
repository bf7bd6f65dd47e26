"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from bulletin.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a directory member."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("role.id"), nullable=False, index=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    first_name = Column(String(80), nullable=False)
    last_name = Column(String(80), nullable=True)
    phone = Column(String(40), nullable=True)
    avatar_url = Column(String(500), nullable=True)
    business_name = Column(String(150), nullable=True)
    approval_status = Column(
        String(20), nullable=False, default="pending", index=True
    )
    is_active = Column(Boolean, nullable=False, default=True)
    deleted = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    role = relationship("RoleModel", lazy="joined")


__all__ = ["UserModel"]
