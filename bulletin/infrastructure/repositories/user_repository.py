"""Persistence layer for directory members."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from bulletin.domain.entities import APPROVAL_STATUS_APPROVED, Role, User
from bulletin.infrastructure.models import RoleModel, UserModel


class UserRepository:
    """Read members and answer eligibility questions for broadcasts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self.to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self._base_query()
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self.to_entity(model) if model else None

    def list_eligible_user_ids(self, filter_ids: Iterable[int] | None = None) -> set[int]:
        """Return ids of approved, active members, optionally within ``filter_ids``."""

        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.deleted.is_(False))
            .filter(UserModel.is_active.is_(True))
            .filter(UserModel.approval_status == APPROVAL_STATUS_APPROVED)
        )
        if filter_ids is not None:
            candidates = {int(user_id) for user_id in filter_ids}
            if not candidates:
                return set()
            query = query.filter(UserModel.id.in_(candidates))
        return {user_id for (user_id,) in query.all()}

    def list_approved(self) -> Sequence[User]:
        query = (
            self._base_query()
            .filter(UserModel.is_active.is_(True))
            .filter(UserModel.approval_status == APPROVAL_STATUS_APPROVED)
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
        )
        return [self.to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel(
            role_id=user.role.id,
            email=user.email,
            password=user.password,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            avatar_url=user.avatar_url,
            business_name=user.business_name,
            approval_status=user.approval_status,
            is_active=user.is_active,
            deleted=user.deleted,
        )
        if user.created_at is not None:
            model.created_at = user.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self.to_entity(model)

    def get_role_by_alias(self, alias: str) -> Role | None:
        model = (
            self.session.query(RoleModel)
            .filter(func.lower(RoleModel.alias) == alias.lower())
            .first()
        )
        return Role(id=model.id, name=model.name, alias=model.alias) if model else None

    def ensure_role(self, alias: str, name: str) -> Role:
        """Return the role with ``alias``, creating it when missing."""

        existing = self.get_role_by_alias(alias)
        if existing is not None:
            return existing
        model = RoleModel(name=name, alias=alias)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return Role(id=model.id, name=model.name, alias=model.alias)

    @staticmethod
    def to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=UserRepository._role_to_entity(model.role),
            email=model.email,
            password=model.password,
            first_name=model.first_name,
            last_name=model.last_name,
            phone=model.phone,
            avatar_url=model.avatar_url,
            business_name=model.business_name,
            approval_status=model.approval_status,
            is_active=model.is_active,
            deleted=model.deleted,
            created_at=model.created_at,
        )

    def _base_query(self):
        return (
            self.session.query(UserModel)
            .options(joinedload(UserModel.role))
            .filter(UserModel.deleted.is_(False))
        )

    def _get_model(self, **filters) -> UserModel | None:
        return self._base_query().filter_by(**filters).first()

    @staticmethod
    def _role_to_entity(model_role) -> Role:
        if model_role is None:
            msg = "User role is not set"
            raise ValueError(msg)
        return Role(id=model_role.id, name=model_role.name, alias=model_role.alias)


__all__ = ["UserRepository"]
