# -*- coding: utf-8 -*-
"""
API роутер программы мероприятия.

Эндпоинты:
- GET /sessions - Сессии вместе со спикерами
- GET /speakers - Спикеры
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import ValidationError

from event_backend.database import Database, DatabaseError
from event_backend.dependencies import get_database
from event_backend.models import Session, SessionWithSpeaker, Speaker

router = APIRouter()
logger = logging.getLogger("event_backend.routers.program")


def resolve_speaker(db: Database, speaker_id: str) -> Optional[Speaker]:
    """
    Находит спикера сессии.

    Ошибка поиска не роняет весь список: сессия просто остаётся без спикера.

    Args:
        db: Шлюз базы данных
        speaker_id: ID спикера из сессии (может быть пустым)

    Returns:
        Спикер или None, если ссылка пустая или не разрешилась
    """
    if not speaker_id:
        return None
    try:
        document = db.speakers.get(speaker_id)
    except DatabaseError as e:
        logger.warning(f"Не удалось получить спикера {speaker_id}: {e}")
        return None
    if document is None:
        return None
    try:
        return Speaker.from_document(document)
    except ValidationError as e:
        logger.warning(f"Повреждённый документ спикера {speaker_id}: {e}")
        return None


@router.get(
    "/sessions",
    response_model=List[SessionWithSpeaker],
    response_model_exclude_none=True,
)
def get_sessions(db: Database = Depends(get_database)):
    """
    Список сессий со спикерами.

    Связь сессия-спикер собирается здесь, а не в базе данных.
    """
    speakers: Dict[str, Optional[Speaker]] = {}
    result: List[SessionWithSpeaker] = []

    for document in db.sessions.list():
        try:
            session = Session.from_document(document)
        except ValidationError as e:
            logger.warning(f"Пропущен повреждённый документ сессии {document.id}: {e}")
            continue

        if session.speaker_id not in speakers:
            speakers[session.speaker_id] = resolve_speaker(db, session.speaker_id)
        result.append(SessionWithSpeaker.compose(session, speakers[session.speaker_id]))

    return result


@router.get("/speakers", response_model=List[Speaker])
def get_speakers(db: Database = Depends(get_database)):
    """Список спикеров."""
    speakers: List[Speaker] = []
    for document in db.speakers.list():
        try:
            speakers.append(Speaker.from_document(document))
        except ValidationError as e:
            logger.warning(f"Пропущен повреждённый документ спикера {document.id}: {e}")
    return speakers
