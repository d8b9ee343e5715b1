# -*- coding: utf-8 -*-
"""
Настройка логирования сервиса и uvicorn.
"""

from __future__ import annotations

import logging
import logging.config
import time
from pathlib import Path

from event_backend.config import Settings

MAX_TOTAL_SIZE = 100 * 1024 * 1024  # 100 МБ
MAX_FILE_AGE_DAYS = 30


class SuppressWatchFilesFilter(logging.Filter):
    """
    Фильтр удаляет шумные сообщения вида «1 change detected»,
    которые возникают при работе hot-reload.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        message = record.getMessage().lower()
        return "change detected" not in message


def setup_logging(settings: Settings) -> None:
    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    level = settings.LOG_LEVEL.upper()

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "suppress_watchfiles": {
                "()": "event_backend.logging_config.SuppressWatchFilesFilter",
            },
        },
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
            "short": {
                "format": "%(levelname)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "short",
                "filters": ["suppress_watchfiles"],
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "standard",
                "filename": str(log_file),
                "maxBytes": settings.LOG_MAX_SIZE_MB * 1024 * 1024,
                "backupCount": settings.LOG_BACKUP_COUNT,
                "encoding": "utf-8",
                "delay": True,
                "filters": ["suppress_watchfiles"],
            },
        },
        "root": {
            "handlers": ["console", "file"],
            "level": level,
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["console", "file"],
                "level": level,
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["console", "file"],
                "level": level,
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console", "file"],
                "level": level,
                "propagate": False,
            },
            # grpc/google клиенты Firestore слишком болтливы на INFO
            "google": {
                "handlers": ["file"],
                "level": "WARNING",
                "propagate": False,
            },
            "watchfiles": {
                "handlers": ["console", "file"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(config)
    cleanup_logs(log_file)


def cleanup_logs(log_file: Path) -> None:
    """Удаляет старые логи и ограничивает общий объём."""
    now = time.time()
    max_age_seconds = MAX_FILE_AGE_DAYS * 24 * 60 * 60

    files = sorted(
        log_file.parent.glob(f"{log_file.name}*"),
        key=lambda f: f.stat().st_mtime if f.exists() else 0,
        reverse=True,
    )

    total_size = 0
    for file in files:
        try:
            stat = file.stat()
        except FileNotFoundError:
            continue

        # Удаляем слишком старые файлы
        if now - stat.st_mtime > max_age_seconds:
            file.unlink(missing_ok=True)
            continue

        total_size += stat.st_size
        if total_size > MAX_TOTAL_SIZE:
            file.unlink(missing_ok=True)
