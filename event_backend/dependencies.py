# -*- coding: utf-8 -*-
"""
Dependency wiring для FastAPI.

Настройки и шлюз базы данных создаются один раз в create_app и
хранятся в app.state; обработчики получают их через Depends.
"""

from fastapi import Request

from event_backend.config import Settings
from event_backend.database import Database


def get_app_settings(request: Request) -> Settings:
    """Настройки, с которыми собрано приложение."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """Шлюз базы данных, созданный при старте приложения."""
    return request.app.state.database
