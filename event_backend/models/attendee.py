# -*- coding: utf-8 -*-
"""
Pydantic схемы участников мероприятия.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from event_backend.models.base import DocumentModel
from event_backend.utils.security import validate_email


class Attendee(DocumentModel):
    """Зарегистрированный участник. Создаётся один раз, не изменяется."""
    full_name: str = Field("", alias="fullName", description="Полное имя")
    email: str = Field("", description="Email (уникален в коллекции)")
    designation: str = Field("", description="Должность")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Время регистрации")


class RegisterRequest(BaseModel):
    """Запрос на регистрацию участника."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    full_name: str = Field(..., alias="fullName", min_length=1, max_length=255, description="Полное имя")
    email: str = Field(..., min_length=1, max_length=255, description="Email")
    designation: str = Field(..., min_length=1, max_length=255, description="Должность")

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        if not validate_email(v):
            raise ValueError("некорректный email")
        return v


class CountResponse(BaseModel):
    """Количество зарегистрированных участников."""
    count: int = Field(..., description="Количество участников")
