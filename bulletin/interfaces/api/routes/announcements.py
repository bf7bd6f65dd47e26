"""Rutas para enviar y administrar anuncios a los miembros."""

from __future__ import annotations

import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bulletin.application.use_cases.announcements import (
    delete_announcement as delete_announcement_uc,
    get_announcement_detail as get_announcement_detail_uc,
    list_announcement_candidates as list_announcement_candidates_uc,
    list_announcements as list_announcements_uc,
    send_announcement as send_announcement_uc,
)
from bulletin.domain.entities import RecipientSelection, User, get_user_display_name
from bulletin.domain.errors import (
    AggregationFailedError,
    AnnouncementError,
    AnnouncementNotFoundError,
    NoRecipientsError,
)
from bulletin.infrastructure.database import get_db
from bulletin.interfaces.api.dependencies import require_admin
from bulletin.interfaces.api.schemas import (
    AnnouncementCreate,
    AnnouncementDeleteResponse,
    AnnouncementDetailRead,
    AnnouncementSendResponse,
    AnnouncementSummaryRead,
    CandidateRead,
)

router = APIRouter(prefix="/announcements", tags=["announcements"])
logger = logging.getLogger(__name__)

_NO_RECIPIENTS_DETAIL = "No hay destinatarios aprobados seleccionados"
_NOT_FOUND_DETAIL = "Anuncio no encontrado"
_UNAVAILABLE_DETAIL = "No se pudo completar la operación, inténtalo nuevamente"


def _raise_http_error(exc: AnnouncementError) -> NoReturn:
    if isinstance(exc, NoRecipientsError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=_NO_RECIPIENTS_DETAIL
        ) from exc
    if isinstance(exc, AnnouncementNotFoundError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND_DETAIL
        ) from exc
    logger.warning("Operación de anuncios fallida (%s): %s", type(exc).__name__, exc)
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=_UNAVAILABLE_DETAIL
    ) from exc


@router.post(
    "/",
    response_model=AnnouncementSendResponse,
    status_code=status.HTTP_201_CREATED,
)
def send_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> AnnouncementSendResponse:
    """Envía el anuncio a todos los miembros aprobados o a una selección."""

    selection = (
        RecipientSelection.everyone()
        if payload.send_to_all
        else RecipientSelection.explicit(payload.recipient_ids)
    )
    try:
        result = send_announcement_uc(
            db,
            sender=current_user,
            title=payload.title,
            message=payload.message,
            action_url=payload.action_url,
            selection=selection,
        )
    except AnnouncementError as exc:
        _raise_http_error(exc)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return AnnouncementSendResponse(recipient_count=result.recipient_count)


@router.get("/", response_model=list[AnnouncementSummaryRead])
def list_announcements(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[AnnouncementSummaryRead]:
    """Devuelve los anuncios enviados, del más reciente al más antiguo."""

    try:
        summaries = list_announcements_uc(db)
    except AggregationFailedError as exc:
        _raise_http_error(exc)
    return [AnnouncementSummaryRead.model_validate(summary) for summary in summaries]


@router.get("/recipients", response_model=list[CandidateRead])
def list_recipient_candidates(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[CandidateRead]:
    """Devuelve los miembros aprobados que pueden recibir anuncios."""

    return [
        CandidateRead(
            id=user.id,
            email=user.email,
            display_name=get_user_display_name(user),
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            avatar_url=user.avatar_url,
            business_name=user.business_name,
            approval_status=user.approval_status,
            created_at=user.created_at,
        )
        for user in list_announcement_candidates_uc(db)
    ]


@router.get("/{notification_id}", response_model=AnnouncementDetailRead)
def read_announcement(
    notification_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> AnnouncementDetailRead:
    """Obtiene el anuncio y la lista completa de destinatarios."""

    try:
        detail = get_announcement_detail_uc(db, notification_id)
    except AnnouncementError as exc:
        _raise_http_error(exc)
    return AnnouncementDetailRead.model_validate(detail)


@router.delete("/{notification_id}", response_model=AnnouncementDeleteResponse)
def delete_announcement(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> AnnouncementDeleteResponse:
    """Elimina todas las copias del anuncio indicado."""

    try:
        deleted = delete_announcement_uc(db, notification_id)
    except AnnouncementError as exc:
        _raise_http_error(exc)
    logger.info(
        "El usuario %s eliminó %s copias del anuncio %s",
        current_user.id,
        deleted,
        notification_id,
    )
    return AnnouncementDeleteResponse(deleted_count=deleted)
