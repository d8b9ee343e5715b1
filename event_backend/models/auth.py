# -*- coding: utf-8 -*-
"""
Pydantic схемы аутентификации администратора.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Запрос на вход по общему паролю."""
    password: str = Field("", max_length=255, description="Пароль администратора")


class LoginResponse(BaseModel):
    """Ответ на успешный вход."""
    token: str = Field(..., description="JWT токен администратора")


class MessageResponse(BaseModel):
    """Текстовое подтверждение операции."""
    message: str = Field(..., description="Сообщение")
