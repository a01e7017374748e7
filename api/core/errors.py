"""
JSON error envelope and app-level exception handlers.

Every error leaves the API as `{"success": false, "message": ...}`. Store and
other unexpected failures are logged with a correlation id; only the id is
returned to the client.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# Upload failures are explicit and separable from other client errors.
class UploadError(RuntimeError):
    pass


def error_body(message: str, **extra: object) -> dict:
    body: dict = {"success": False, "message": message}
    body.update(extra)
    return body


def new_error_id() -> str:
    return uuid.uuid4().hex[:12]


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Starlette raises a bare 404 "Not Found" when no route matches.
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body("Endpoint no encontrado", path=request.url.path),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        name = str(loc[-1]) if loc else "body"
        if name not in fields:
            fields.append(name)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Datos inválidos", fields=fields),
    )


async def upload_exception_handler(request: Request, exc: UploadError) -> JSONResponse:
    logger.info("upload_rejected path=%s reason=%s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Error en la subida del archivo", error=str(exc)),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    error_id = new_error_id()
    logger.exception(
        "unhandled_error error_id=%s method=%s path=%s",
        error_id,
        request.method,
        request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Error interno del servidor", error_id=error_id),
    )


def install(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(UploadError, upload_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
