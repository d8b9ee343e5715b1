# -*- coding: utf-8 -*-
"""
JWT токены администратора.

Реализует:
- Проверку общего пароля администратора
- Выпуск токена с признаком admin и сроком жизни
- Валидацию токена (подпись, срок, признак admin)

Токены не хранятся на сервере и не отзываются: единственный способ
завершить сессию администратора - истечение срока.
"""

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from event_backend.config import Settings

logger = logging.getLogger("event_backend.auth.jwt")

BEARER_PREFIX = "Bearer "


def check_admin_password(password: str, settings: Settings) -> bool:
    """
    Сравнивает пароль с настроенным паролем администратора.

    Args:
        password: Пароль из запроса
        settings: Настройки сервиса

    Returns:
        True если пароль совпал; False если нет или пароль не настроен
    """
    if not settings.admin_login_enabled:
        return False
    return secrets.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())


def create_admin_token(settings: Settings, now: Optional[datetime] = None) -> str:
    """
    Создаёт JWT токен администратора.

    Args:
        settings: Настройки сервиса (секрет, алгоритм, срок жизни)
        now: Момент выпуска (по умолчанию текущее время UTC)

    Returns:
        Подписанный JWT токен
    """
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "admin": True,
        "iat": issued_at,
        "exp": issued_at + settings.jwt_expire_delta,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_admin_token(token: str, settings: Settings) -> Optional[dict[str, Any]]:
    """
    Проверяет и декодирует токен администратора.

    Args:
        token: JWT токен
        settings: Настройки сервиса

    Returns:
        Данные токена или None если токен невалидный, истёк или не админский
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError:
        logger.info("Отклонён истёкший токен администратора")
        return None
    except JWTError as e:
        logger.info(f"Отклонён невалидный токен администратора: {e}")
        return None

    if payload.get("admin") is not True:
        logger.info("Отклонён токен без признака admin")
        return None
    return payload


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Извлекает токен из заголовка Authorization.

    Принимает как "Bearer <token>", так и токен без префикса.

    Args:
        authorization: Значение заголовка

    Returns:
        Токен или None если заголовок отсутствует или пуст
    """
    if not authorization:
        return None
    token = authorization
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):]
    token = token.strip()
    return token or None
