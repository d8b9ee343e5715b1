# -*- coding: utf-8 -*-
"""
Pydantic схемы сессий (докладов) и их связи со спикерами.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from event_backend.models.base import DocumentModel, empty_if_none
from event_backend.models.speaker import Speaker


class Session(DocumentModel):
    """Сессия программы. Время хранится как есть, без часового пояса."""
    title: str = Field("", description="Название")
    description: str = Field("", description="Описание")
    time: str = Field("", description="Время проведения")
    speaker_id: str = Field("", alias="speakerId", description="ID спикера")

    @field_validator("description", "time", "speaker_id", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return empty_if_none(value)


class SessionWithSpeaker(Session):
    """Сессия вместе со спикером, найденным при чтении (не хранится)."""
    speaker: Optional[Speaker] = Field(None, description="Спикер, если найден")

    @classmethod
    def compose(cls, session: Session, speaker: Optional[Speaker]) -> "SessionWithSpeaker":
        return cls(**session.model_dump(), speaker=speaker)


class SessionUpsert(BaseModel):
    """Создание (без id) или полная замена (с id) сессии."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    id: Optional[str] = Field(None, description="ID существующей сессии")
    title: str = Field(..., min_length=1, max_length=255, description="Название")
    description: str = Field("", description="Описание")
    time: str = Field("", description="Время проведения")
    speaker_id: str = Field("", alias="speakerId", description="ID спикера")

    @field_validator("description", "time", "speaker_id", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return empty_if_none(value)

    def to_session(self) -> Session:
        return Session(
            title=self.title,
            description=self.description,
            time=self.time,
            speaker_id=self.speaker_id,
        )
