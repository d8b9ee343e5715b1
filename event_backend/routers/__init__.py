# -*- coding: utf-8 -*-
"""
API роутеры сервиса.

Содержит:
- registration: Регистрация участников
- program: Сессии и спикеры
- auth: Вход администратора
- admin: Админ-панель (требует токен)
- todos: Задачи
"""

from event_backend.routers import admin, auth, program, registration, todos

__all__ = [
    "admin",
    "auth",
    "program",
    "registration",
    "todos",
]
