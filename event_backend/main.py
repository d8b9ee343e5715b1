# -*- coding: utf-8 -*-
"""
Точка входа FastAPI приложения.

Порядок обработки запроса:
CORS middleware -> маршрутизация -> (для /api/admin/*) require_admin -> обработчик.
Остальные пути отдаются из каталога статики с SPA fallback на index.html.

Запуск:
    uvicorn event_backend.main:get_app --factory --host 0.0.0.0 --port 8080
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from event_backend.config import Settings, get_settings
from event_backend.database import Database, DatabaseError, create_database
from event_backend.logging_config import setup_logging
from event_backend.middleware import CORSHeadersMiddleware

logger = logging.getLogger("event_backend.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Контекстный менеджер жизненного цикла приложения.

    Создаёт шлюз базы данных (если он не передан явно) и проверяет
    подключение. Недоступная база данных останавливает запуск.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Запуск {settings.APP_NAME} {settings.APP_VERSION} ({settings.APP_ENV})")

    if app.state.database is None:
        app.state.database = create_database(settings)

    try:
        app.state.database.ping()
        logger.info("Подключение к базе данных установлено")
    except DatabaseError as e:
        logger.error(f"Не удалось подключиться к базе данных: {e}")
        raise

    yield

    # Shutdown
    logger.info("Остановка сервиса...")
    app.state.database.close()
    logger.info("Сервис остановлен")


def register_routers(app: FastAPI, settings: Settings) -> None:
    """Регистрирует все API роутеры."""
    from event_backend.routers import admin, auth, program, registration, todos

    prefix = settings.API_PREFIX
    app.include_router(program.router, prefix=prefix, tags=["Program"])
    app.include_router(registration.router, prefix=prefix, tags=["Registration"])
    app.include_router(auth.router, prefix=f"{prefix}/admin", tags=["Authentication"])
    app.include_router(admin.router, prefix=f"{prefix}/admin", tags=["Admin"])
    app.include_router(todos.router, prefix=f"{prefix}/todos", tags=["Todos"])


def register_exception_handlers(app: FastAPI) -> None:
    """
    Обработчики ошибок валидации и базы данных.

    Необработанные исключения перехватывает CORSHeadersMiddleware.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Битое тело запроса или отсутствующие поля - 400, а не 422."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(DatabaseError)
    async def database_exception_handler(request: Request, exc: DatabaseError):
        logger.error(f"Ошибка базы данных на {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": f"Ошибка базы данных: {exc}"},
        )


def mount_frontend(app: FastAPI, settings: Settings) -> None:
    """
    Раздача собранного фронтенда с SPA fallback.

    Существующий файл отдаётся как есть, любой другой путь получает
    index.html. Пути под префиксом API всегда дают 404, чтобы не маскировать
    настоящие ошибки маршрутизации страницей приложения.
    """
    static_dir = Path(settings.STATIC_DIR).resolve()
    if not static_dir.is_dir():
        logger.info(f"Каталог статики {static_dir} не найден, раздача фронтенда отключена")
        return

    logger.info(f"Раздача статических файлов из: {static_dir}")

    assets_path = static_dir / "assets"
    if assets_path.is_dir():
        app.mount("/assets", StaticFiles(directory=str(assets_path)), name="assets")

    api_prefix = settings.api_prefix_path

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_spa(full_path: str):
        """Отдаёт файл из каталога статики или index.html."""
        if full_path == api_prefix or full_path.startswith(f"{api_prefix}/"):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Not found"})

        file_path = (static_dir / full_path).resolve()
        if file_path.is_relative_to(static_dir) and file_path.is_file():
            return FileResponse(file_path)

        index_path = static_dir / "index.html"
        if index_path.is_file():
            return FileResponse(index_path)

        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Not found"})


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Собирает приложение.

    Args:
        settings: Настройки (по умолчанию из окружения)
        database: Готовый шлюз базы данных; если не передан, создаётся при старте

    Returns:
        Приложение FastAPI
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="REST API регистрации на мероприятие и админ-панели",
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(CORSHeadersMiddleware)
    register_exception_handlers(app)

    @app.get("/health", tags=["System"])
    async def health_check():
        """Проверка работоспособности сервиса."""
        return {"status": "ok", "version": settings.APP_VERSION}

    register_routers(app, settings)

    # Catch-all маршрут SPA регистрируется последним
    mount_frontend(app, settings)

    return app


def get_app() -> FastAPI:
    """Фабрика для uvicorn: настраивает логирование и собирает приложение."""
    settings = get_settings()
    setup_logging(settings)
    return create_app(settings)
