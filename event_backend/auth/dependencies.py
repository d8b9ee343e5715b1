# -*- coding: utf-8 -*-
"""
FastAPI зависимости для авторизации администратора.

require_admin подключается ко всему админ-роутеру, кроме входа.
Любая ошибка (нет заголовка, битый токен, чужая подпись, истёкший срок)
даёт одинаковый ответ 401, и защищённый обработчик не вызывается.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from event_backend.auth.jwt import extract_token, verify_admin_token
from event_backend.config import Settings
from event_backend.dependencies import get_app_settings
from event_backend.utils.security import get_client_ip

logger = logging.getLogger("event_backend.auth.dependencies")

UNAUTHORIZED_DETAIL = "Unauthorized"


def unauthorized() -> HTTPException:
    """Единый ответ на любую ошибку авторизации."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED_DETAIL,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_admin(
    request: Request,
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """
    Проверяет токен администратора из заголовка Authorization.

    Args:
        request: Текущий запрос (для логирования IP)
        authorization: Заголовок Authorization
        settings: Настройки сервиса

    Returns:
        Данные токена

    Raises:
        HTTPException 401: Если токен отсутствует или невалидный
    """
    token = extract_token(authorization)
    if token is None:
        logger.info(f"Запрос без токена к {request.url.path}, IP: {get_client_ip(request)}")
        raise unauthorized()

    token_data = verify_admin_token(token, settings)
    if token_data is None:
        logger.warning(f"Невалидный токен к {request.url.path}, IP: {get_client_ip(request)}")
        raise unauthorized()

    return token_data
