# -*- coding: utf-8 -*-
"""
Pydantic схемы спикеров.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from event_backend.models.base import DocumentModel, empty_if_none


class Speaker(DocumentModel):
    """Спикер мероприятия."""
    name: str = Field("", description="Имя")
    bio: str = Field("", description="Краткая биография")
    photo_url: str = Field("", alias="photoURL", description="Ссылка на фото")

    @field_validator("bio", "photo_url", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return empty_if_none(value)


class SpeakerUpsert(BaseModel):
    """Создание (без id) или полная замена (с id) спикера."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    id: Optional[str] = Field(None, description="ID существующего спикера")
    name: str = Field(..., min_length=1, max_length=255, description="Имя")
    bio: str = Field("", description="Краткая биография")
    photo_url: str = Field("", alias="photoURL", description="Ссылка на фото")

    @field_validator("bio", "photo_url", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return empty_if_none(value)

    def to_speaker(self) -> Speaker:
        return Speaker(name=self.name, bio=self.bio, photo_url=self.photo_url)
