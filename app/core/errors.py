"""
Обработчики ошибок приложения.

Формат ответа об ошибке везде один: {"message": ...}. Детали
необработанных исключений (текст и стек) отдаются клиенту только
при NODE_ENV=development.
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.core.config import settings
from app.storage.base import ExerciseNotFoundError

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())}
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


async def exercise_not_found_handler(request: Request, exc: ExerciseNotFoundError):
    return JSONResponse(status_code=400, content={"message": str(exc)})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Необработанная ошибка {request.method} {request.url.path}")

    content = {"message": "Internal server error", "error": "Internal server error"}
    if settings.is_development:
        content["error"] = str(exc)
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(ExerciseNotFoundError, exercise_not_found_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
