"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Iterable

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from bulletin.domain.entities import Notification, NotificationFilter, User
from bulletin.domain.errors import StoreError
from bulletin.infrastructure.models import NotificationModel
from bulletin.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

from .user_repository import UserRepository

logger = logging.getLogger(__name__)

ContentKey = tuple[int | None, str, str]


class NotificationRepository:
    """Provide storage primitives for :class:`Notification` objects.

    Database failures are rolled back and re-raised as :class:`StoreError`.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        with self._store_errors("get"):
            model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def insert_batch(self, notifications: Sequence[Notification]) -> list[Notification]:
        """Persist ``notifications`` in a single transaction.

        Either every row is committed or none is.
        """

        if not notifications:
            return []
        models = []
        for notification in notifications:
            model = NotificationModel()
            self._apply_entity_to_model(model, notification)
            models.append(model)
        with self._store_errors("insert_batch"):
            self.session.add_all(models)
            self.session.flush()
            saved = [self._to_entity(model) for model in models]
            self.session.commit()
        return saved

    def scan(
        self, criteria: NotificationFilter, *, newest_first: bool = True
    ) -> list[Notification]:
        query = self._filtered_query(criteria)
        if newest_first:
            query = query.order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
        else:
            query = query.order_by(
                NotificationModel.created_at.asc(), NotificationModel.id.asc()
            )
        with self._store_errors("scan"):
            models = query.all()
        return [self._to_entity(model) for model in models]

    def scan_with_recipients(
        self, criteria: NotificationFilter
    ) -> list[tuple[Notification, User | None]]:
        """Return matching notifications paired with their recipient profile."""

        query = self._filtered_query(criteria).order_by(NotificationModel.id.asc())
        with self._store_errors("scan_with_recipients"):
            models = query.all()
        return [
            (
                self._to_entity(model),
                UserRepository.to_entity(model.user) if model.user else None,
            )
            for model in models
        ]

    def count_read_by_content(self, event_type: str) -> dict[ContentKey, tuple[int, int]]:
        """Return ``(total, read)`` counts grouped by sender, title and message."""

        read_flag = case((NotificationModel.is_read.is_(True), 1), else_=0)
        query = (
            self.session.query(
                NotificationModel.sender_id,
                NotificationModel.title,
                NotificationModel.message,
                func.count(NotificationModel.id),
                func.coalesce(func.sum(read_flag), 0),
            )
            .filter(NotificationModel.event_type == event_type)
            .group_by(
                NotificationModel.sender_id,
                NotificationModel.title,
                NotificationModel.message,
            )
        )
        with self._store_errors("count_read_by_content"):
            rows = query.all()
        return {
            (sender_id, title, message): (int(total), int(read))
            for sender_id, title, message, total, read in rows
        }

    def delete_where(self, criteria: NotificationFilter) -> int:
        """Delete every notification matching ``criteria`` and return the count."""

        with self._store_errors("delete_where"):
            deleted = self._filtered_query(criteria).delete(synchronize_session=False)
            self.session.commit()
        return int(deleted or 0)

    def list_for_user(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        include_archived: bool = False,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        if not include_archived:
            query = query.filter(NotificationModel.is_archived.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        with self._store_errors("list_for_user"):
            models = query.all()
        return [self._to_entity(model) for model in models]

    def mark_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        with self._store_errors("mark_as_read"):
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.id.in_(ids),
                    NotificationModel.user_id == user_id,
                    NotificationModel.is_read.is_(False),
                )
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.read_at: ensure_app_naive_datetime(
                            now_in_app_timezone()
                        ),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        return int(updated or 0)

    def set_archived(
        self, notification_id: int, *, user_id: int, archived: bool = True
    ) -> bool:
        with self._store_errors("set_archived"):
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.id == notification_id,
                    NotificationModel.user_id == user_id,
                )
                .update(
                    {NotificationModel.is_archived: archived},
                    synchronize_session=False,
                )
            )
            self.session.commit()
        return bool(updated)

    def _filtered_query(self, criteria: NotificationFilter) -> Query:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.event_type == criteria.event_type
        )
        if criteria.title is not None:
            query = query.filter(NotificationModel.title == criteria.title)
        if criteria.message is not None:
            query = query.filter(NotificationModel.message == criteria.message)
        if criteria.exact_sender and criteria.sender_id is None:
            query = query.filter(NotificationModel.sender_id.is_(None))
        elif criteria.sender_id is not None:
            query = query.filter(NotificationModel.sender_id == criteria.sender_id)
        return query

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Notification store %s failed: %s", operation, exc)
            raise StoreError(f"Notification store {operation} failed") from exc

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )
        model.user_id = notification.user_id
        model.event_type = notification.event_type
        model.title = notification.title
        model.message = notification.message
        model.action_url = notification.action_url
        model.sender_id = notification.sender_id
        model.group_key = notification.group_key
        model.payload = notification.payload or {}
        model.is_read = notification.is_read
        model.is_archived = notification.is_archived
        model.read_at = ensure_app_naive_datetime(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            event_type=model.event_type,
            title=model.title,
            message=model.message,
            action_url=model.action_url,
            sender_id=model.sender_id,
            group_key=model.group_key,
            payload=model.payload or {},
            is_read=bool(model.is_read),
            is_archived=bool(model.is_archived),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["ContentKey", "NotificationRepository"]
