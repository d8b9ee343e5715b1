"""
Запуск REST API сервиса регистрации.

Использование:
    python run_api.py
"""

import uvicorn

from event_backend.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "event_backend.main:get_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
