"""Error type shared by the upload endpoint and its JSON rendering."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGE = "Only available in development mode"
MISSING_FILE_MESSAGE = "No file provided"
INVALID_EXTENSION_MESSAGE = "Only video files can be uploaded (MP4, WebM, OGG)"
INVALID_PURPOSE_MESSAGE = "Invalid purpose"
INTERNAL_MESSAGE = "An error occurred while uploading the file"
INVALID_REQUEST_MESSAGE = "Invalid request"
SERVER_ERROR_MESSAGE = "An internal error occurred"


def oversize_message(max_mb: int) -> str:
    return f"File size must be {max_mb}MB or less"


class UploadError(Exception):
    """An upload failure with the HTTP status it maps to.

    The message is returned to the client verbatim, so it must never carry
    filesystem paths or exception text.
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)

    @classmethod
    def forbidden(cls) -> "UploadError":
        return cls(403, FORBIDDEN_MESSAGE)

    @classmethod
    def bad_request(cls, message: str) -> "UploadError":
        return cls(400, message)

    @classmethod
    def internal(cls) -> "UploadError":
        return cls(500, INTERNAL_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(UploadError)
    async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
        logger.warning("HTTP %d: %s | path=%s", exc.status_code, exc.message, request.url.path)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # every error body has the same {"error": ...} shape
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        logger.warning("HTTP %d: %s | path=%s", exc.status_code, exc.detail, request.url.path)
        message = str(exc.detail) if exc.status_code < 500 else SERVER_ERROR_MESSAGE
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Invalid request: %s | path=%s", exc.errors(), request.url.path)
        return JSONResponse(status_code=400, content={"error": INVALID_REQUEST_MESSAGE})
