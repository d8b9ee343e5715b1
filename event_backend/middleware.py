# -*- coding: utf-8 -*-
"""
CORS middleware.

Самый внешний слой приложения: добавляет разрешающие CORS заголовки к
каждому ответу и отвечает на любой OPTIONS запрос (preflight) пустым 200
до маршрутизации и проверки токена. Необработанное исключение тоже
превращается здесь в ответ 500, чтобы браузер увидел ошибку, а не отказ CORS.
"""

import logging

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("event_backend.middleware")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

INTERNAL_ERROR_DETAIL = "Внутренняя ошибка сервера"


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Разрешающие CORS заголовки и короткий ответ на preflight."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Необработанное исключение на {request.method} {request.url.path}: {exc}",
                exc_info=True,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": INTERNAL_ERROR_DETAIL},
                headers=CORS_HEADERS,
            )

        response.headers.update(CORS_HEADERS)
        return response
