# This file defines consistent API error payloads and exception handlers.
# It exists so every endpoint returns the same small error shape regardless of where a failure happens.
# The handlers translate validation, HTTP, and unexpected failures into safe client messages.
# Centralized error handling prevents SQL text and stack traces from leaking into responses.

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

LOGGER = logging.getLogger("price_api.api")


class APIError(Exception):
    """Domain error type carrying the HTTP status and client-safe message."""

    body_field = "error"

    def __init__(self, *, status_code: int, error_code: str, message: str) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        super().__init__(message)

    def body(self) -> dict[str, str]:
        return {self.body_field: self.message}


class NotFoundError(APIError):
    """Empty result from an otherwise successful query."""

    body_field = "message"

    def __init__(self, message: str) -> None:
        super().__init__(status_code=404, error_code="NOT_FOUND", message=message)


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.body())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_: Request, __: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request parameters"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.error(
            "unhandled error method=%s path=%s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
