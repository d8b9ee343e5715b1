# -*- coding: utf-8 -*-
"""
Модуль аутентификации администратора.

Содержит:
- jwt: Проверка пароля, выпуск и валидация JWT токенов
- dependencies: FastAPI зависимость require_admin
"""

from event_backend.auth.jwt import (
    check_admin_password,
    create_admin_token,
    extract_token,
    verify_admin_token,
)
from event_backend.auth.dependencies import require_admin

__all__ = [
    # JWT
    "check_admin_password",
    "create_admin_token",
    "extract_token",
    "verify_admin_token",
    # Dependencies
    "require_admin",
]
