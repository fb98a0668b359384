"""
Маппинг исключений в HTTP ответы.

Формат ошибки: {"error": <сообщение>, "kind": <стабильный код>}.
Детали внутренних ошибок (stack trace, SQL) только в логах.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from personal_blog.shared.exceptions.domain_exceptions import DomainException

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation": 400,
    "invalid_transition": 400,
    "unauthenticated": 401,
    "forbidden": 403,
    "not_found": 404,
    "conflict": 409,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, 400)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message or exc.kind, "kind": exc.kind},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message, "kind": "validation"})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[API] Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": INTERNAL_ERROR_MESSAGE, "kind": "internal"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
