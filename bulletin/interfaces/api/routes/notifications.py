"""Rutas para la bandeja de notificaciones del usuario autenticado."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from bulletin.application.use_cases.notifications import (
    archive_notification as archive_notification_uc,
    list_user_notifications as list_user_notifications_uc,
    mark_notifications_read as mark_notifications_read_uc,
)
from bulletin.domain.entities import User
from bulletin.domain.errors import StoreError
from bulletin.infrastructure.database import get_db
from bulletin.interfaces.api.dependencies import get_current_active_user
from bulletin.interfaces.api.schemas import NotificationMarkReadRequest, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="No se pudo acceder a las notificaciones",
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(False, description="Solo notificaciones sin leer"),
    include_archived: bool = Query(False, description="Incluir notificaciones archivadas"),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Devuelve las notificaciones más recientes del usuario autenticado."""

    try:
        notifications = list_user_notifications_uc(
            db,
            user_id=current_user.id,
            unread_only=unread_only,
            include_archived=include_archived,
            limit=limit,
        )
    except StoreError as exc:
        raise _unavailable() from exc
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.post("/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Marca como leídas las notificaciones indicadas."""

    try:
        mark_notifications_read_uc(
            db, user_id=current_user.id, notification_ids=payload.unique_ids()
        )
    except StoreError as exc:
        raise _unavailable() from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{notification_id}/archive", status_code=status.HTTP_204_NO_CONTENT)
def archive_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Archiva una notificación del usuario autenticado."""

    try:
        archive_notification_uc(
            db, user_id=current_user.id, notification_id=notification_id
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StoreError as exc:
        raise _unavailable() from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
