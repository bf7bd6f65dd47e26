"""SQLAlchemy model for directory roles."""

from sqlalchemy import Column, Integer, String

from bulletin.infrastructure.database import Base


class RoleModel(Base):
    """Roles available to directory members (``admin`` or ``member``)."""

    __tablename__ = "role"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    alias = Column(String(50), nullable=False, unique=True, index=True)
    description = Column(String(255), nullable=True)


__all__ = ["RoleModel"]
