# -*- coding: utf-8 -*-
"""
API роутер админ-панели. Все эндпоинты требуют токен администратора.

Эндпоинты:
- GET /attendees - Список участников
- GET /stats - Количество участников по должностям
- POST /speakers - Создание или замена спикера
- POST /sessions - Создание или замена сессии
"""

import logging
from collections import Counter
from typing import Dict, List

from fastapi import APIRouter, Depends, Response, status
from pydantic import ValidationError

from event_backend.auth.dependencies import require_admin
from event_backend.database import Database
from event_backend.dependencies import get_database
from event_backend.models import Attendee, Session, SessionUpsert, Speaker, SpeakerUpsert

router = APIRouter(dependencies=[Depends(require_admin)])
logger = logging.getLogger("event_backend.routers.admin")


@router.get("/attendees", response_model=List[Attendee])
def get_attendees(db: Database = Depends(get_database)):
    """Список всех зарегистрированных участников."""
    attendees: List[Attendee] = []
    for document in db.attendees.list():
        try:
            attendees.append(Attendee.from_document(document))
        except ValidationError as e:
            logger.warning(f"Пропущен повреждённый документ участника {document.id}: {e}")
    return attendees


@router.get("/stats", response_model=Dict[str, int])
def get_stats(db: Database = Depends(get_database)):
    """Гистограмма участников по должностям."""
    designations = Counter(
        document.data.get("designation", "") for document in db.attendees.list()
    )
    return dict(designations)


@router.post("/speakers", response_model=Speaker)
def upsert_speaker(
    data: SpeakerUpsert,
    response: Response,
    db: Database = Depends(get_database),
):
    """
    Создание спикера (без id) или полная замена существующего (с id).
    """
    speaker = data.to_speaker()

    if data.id:
        db.speakers.set(data.id, speaker.to_document())
        speaker.id = data.id
        logger.info(f"Обновлён спикер {speaker.id}")
    else:
        speaker.id = db.speakers.add(speaker.to_document())
        response.status_code = status.HTTP_201_CREATED
        logger.info(f"Создан спикер {speaker.id}")

    return speaker


@router.post("/sessions", response_model=Session)
def upsert_session(
    data: SessionUpsert,
    response: Response,
    db: Database = Depends(get_database),
):
    """
    Создание сессии (без id) или полная замена существующей (с id).

    Ссылка на спикера не проверяется: неразрешимая ссылка при чтении
    даёт сессию без спикера.
    """
    session = data.to_session()

    if data.id:
        db.sessions.set(data.id, session.to_document())
        session.id = data.id
        logger.info(f"Обновлена сессия {session.id}")
    else:
        session.id = db.sessions.add(session.to_document())
        response.status_code = status.HTTP_201_CREATED
        logger.info(f"Создана сессия {session.id}")

    return session
