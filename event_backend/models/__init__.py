# -*- coding: utf-8 -*-
"""
Pydantic модели (схемы) сервиса.

Содержит:
- attendee: Участники и регистрация
- speaker: Спикеры
- session: Сессии и связь со спикерами
- todo: Задачи
- auth: Вход администратора
"""

from event_backend.models.attendee import Attendee, CountResponse, RegisterRequest
from event_backend.models.auth import LoginRequest, LoginResponse, MessageResponse
from event_backend.models.session import Session, SessionUpsert, SessionWithSpeaker
from event_backend.models.speaker import Speaker, SpeakerUpsert
from event_backend.models.todo import Todo, TodoCreate, TodoPatch

__all__ = [
    # Attendee
    "Attendee",
    "RegisterRequest",
    "CountResponse",
    # Speaker
    "Speaker",
    "SpeakerUpsert",
    # Session
    "Session",
    "SessionUpsert",
    "SessionWithSpeaker",
    # Todo
    "Todo",
    "TodoCreate",
    "TodoPatch",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
]
