# -*- coding: utf-8 -*-
"""
Конфигурация сервиса регистрации на мероприятие.

Настройки загружаются из переменных окружения (и файла .env).
Использует Pydantic Settings для валидации.
"""

import logging
import secrets
from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("event_backend.config")

# Идентификатор арендатора: все коллекции лежат под clients/{CLIENT_ID}/...
# Задаётся при сборке, через окружение не переопределяется.
CLIENT_ID = "114617498403471847641"


class ConfigError(RuntimeError):
    """Недопустимая конфигурация, при которой сервис не должен стартовать."""


class Settings(BaseSettings):
    """
    Настройки сервиса.

    Обязательные секреты (ADMIN_PASSWORD, JWT_SECRET) проверяются при
    создании объекта: в production их отсутствие сразу останавливает запуск.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Основные настройки ===

    APP_NAME: str = "Event Registration API"
    APP_VERSION: str = "1.0.0"

    # development | production
    APP_ENV: Literal["development", "production"] = "development"

    # Режим отладки (включает /api/docs и reload)
    DEBUG: bool = False

    # === Сервер ===

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Префикс REST API (исключается из SPA fallback)
    API_PREFIX: str = "/api"

    # Каталог собранного фронтенда
    STATIC_DIR: str = "./static"

    # === Админ-доступ ===

    # Общий пароль администратора (без значения по умолчанию)
    ADMIN_PASSWORD: str = ""

    # Секрет подписи JWT
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"

    # Время жизни токена администратора в часах
    JWT_EXPIRE_HOURS: int = 24

    # === База данных ===

    # firestore | memory
    DATABASE_BACKEND: Literal["firestore", "memory"] = "firestore"

    # Путь к JSON сервисного аккаунта. Пусто - Application Default Credentials.
    FIRESTORE_CREDENTIALS_PATH: str = ""
    FIRESTORE_PROJECT_ID: str = ""

    # === Логирование ===

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"
    LOG_MAX_SIZE_MB: int = 5
    LOG_BACKUP_COUNT: int = 20

    @model_validator(mode="after")
    def check_secrets(self) -> "Settings":
        """
        Проверяет секреты при старте.

        В production оба секрета обязательны. В development отсутствующий
        JWT_SECRET заменяется случайным ключом процесса, а без
        ADMIN_PASSWORD вход администратора просто отключён.

        Raises:
            ConfigError: Если в production не задан ADMIN_PASSWORD или JWT_SECRET
        """
        if self.is_production:
            missing = [
                name
                for name, value in (
                    ("ADMIN_PASSWORD", self.ADMIN_PASSWORD),
                    ("JWT_SECRET", self.JWT_SECRET),
                )
                if not value
            ]
            if missing:
                raise ConfigError(
                    f"В production обязательны переменные: {', '.join(missing)}"
                )
            return self

        if not self.JWT_SECRET:
            self.JWT_SECRET = secrets.token_urlsafe(32)
            logger.warning(
                "JWT_SECRET не задан: используется случайный ключ, "
                "токены не переживут перезапуск"
            )
        if not self.ADMIN_PASSWORD:
            logger.warning("ADMIN_PASSWORD не задан: вход администратора отключён")
        return self

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def admin_login_enabled(self) -> bool:
        """Возвращает True, если пароль администратора настроен."""
        return bool(self.ADMIN_PASSWORD)

    @property
    def jwt_expire_delta(self) -> timedelta:
        return timedelta(hours=self.JWT_EXPIRE_HOURS)

    @property
    def api_prefix_path(self) -> str:
        """Префикс API без ведущего слэша (для сравнения с путём SPA)."""
        return self.API_PREFIX.strip("/")


@lru_cache()
def get_settings() -> Settings:
    """
    Получает singleton экземпляр настроек.

    Кэшируется, чтобы случайный JWT_SECRET в development был один на процесс.
    """
    return Settings()
