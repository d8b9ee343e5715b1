# -*- coding: utf-8 -*-
"""
Утилиты безопасности.

Содержит функции для:
- Валидации email
- Маскировки персональных данных в логах
- Извлечения IP клиента
"""

import re

from fastapi import Request

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def validate_email(email: str) -> bool:
    """
    Проверяет корректность email адреса.

    Args:
        email: Email для проверки

    Returns:
        True если email корректный
    """
    if not email:
        return False
    return bool(EMAIL_PATTERN.match(email))


def mask_sensitive_data(data: str, visible_chars: int = 4) -> str:
    """
    Маскирует чувствительные данные для логирования.

    Args:
        data: Данные для маскировки
        visible_chars: Количество видимых символов в начале и конце

    Returns:
        Замаскированная строка
    """
    if not data or len(data) <= visible_chars * 2:
        return "*" * len(data) if data else ""

    return f"{data[:visible_chars]}{'*' * (len(data) - visible_chars * 2)}{data[-visible_chars:]}"


def mask_email(email: str) -> str:
    """Маскирует локальную часть email, домен оставляет видимым."""
    local, _, domain = email.partition("@")
    if not domain:
        return mask_sensitive_data(email)
    return f"{local[:1]}***@{domain}"


def get_client_ip(request: Request) -> str:
    """Извлекает IP клиента из запроса (учитывает прокси)."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
