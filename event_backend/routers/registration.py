# -*- coding: utf-8 -*-
"""
API роутер регистрации участников.

Эндпоинты:
- POST /register - Регистрация участника
- GET /attendees/count - Количество участников
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status

from event_backend.database import Database, DuplicateKeyError
from event_backend.dependencies import get_database
from event_backend.models import Attendee, CountResponse, MessageResponse, RegisterRequest
from event_backend.utils.security import get_client_ip, mask_email

router = APIRouter()
logger = logging.getLogger("event_backend.routers.registration")


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register_attendee(
    request: Request,
    data: RegisterRequest,
    db: Database = Depends(get_database),
):
    """
    Регистрация участника.

    Email уникален: проверка и вставка выполняются атомарно в шлюзе,
    повторная регистрация с тем же email даёт 409.
    """
    attendee = Attendee(
        full_name=data.full_name,
        email=data.email,
        designation=data.designation,
        created_at=datetime.now(timezone.utc),
    )

    try:
        attendee_id = db.attendees.add_unique(attendee.to_document(), "email")
    except DuplicateKeyError:
        logger.info(
            f"Повторная регистрация: {mask_email(data.email)}, IP: {get_client_ip(request)}"
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email уже зарегистрирован",
        )

    logger.info(f"Зарегистрирован участник {attendee_id}: {mask_email(data.email)}")
    return MessageResponse(message="Registration successful")


@router.get("/attendees/count", response_model=CountResponse)
def get_attendee_count(db: Database = Depends(get_database)):
    """Количество зарегистрированных участников."""
    return CountResponse(count=db.attendees.count())
