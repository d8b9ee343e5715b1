# -*- coding: utf-8 -*-
"""
FastAPI бэкенд регистрации на мероприятие.

Модули:
- config: Настройки из окружения
- database: Шлюз к Firestore (и хранилище в памяти)
- auth: Вход администратора и JWT
- routers: API эндпоинты
- models: Pydantic схемы
"""
