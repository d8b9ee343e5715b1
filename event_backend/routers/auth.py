# -*- coding: utf-8 -*-
"""
API роутер входа администратора.

Эндпоинты:
- POST /login - Вход по общему паролю, выдаёт JWT на 24 часа
"""

import logging

from fastapi import APIRouter, Depends, Request

from event_backend.auth.dependencies import unauthorized
from event_backend.auth.jwt import check_admin_password, create_admin_token
from event_backend.config import Settings
from event_backend.dependencies import get_app_settings
from event_backend.models import LoginRequest, LoginResponse
from event_backend.utils.security import get_client_ip

router = APIRouter()
logger = logging.getLogger("event_backend.routers.auth")


@router.post("/login", response_model=LoginResponse)
def login(
    request: Request,
    data: LoginRequest,
    settings: Settings = Depends(get_app_settings),
):
    """
    Вход администратора.

    Неверный пароль и отключённый вход дают одинаковый ответ 401.
    """
    ip = get_client_ip(request)

    if not check_admin_password(data.password, settings):
        logger.warning(f"Неудачная попытка входа администратора, IP: {ip}")
        raise unauthorized()

    token = create_admin_token(settings)
    logger.info(f"Успешный вход администратора, IP: {ip}")
    return LoginResponse(token=token)
