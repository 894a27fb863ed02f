"""
Exception handlers - Map domain and validation errors to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.exceptions import RegistrationStorageError

logger = logging.getLogger(__name__)


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Surface storage failures as 503 instead of reporting success."""
    logger.error(f"Storage failure while handling {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Registration storage unavailable"},
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Return 422 with FastAPI's usual error list.

    Rejected inputs are echoed back; strings that cannot be encoded as
    UTF-8 (lone surrogates from JSON escapes) are backslash-escaped so the
    response itself can be rendered.
    """
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return JSONResponse(
        status_code=422,
        content={"detail": _utf8_safe(jsonable_encoder(errors))},
    )


def _utf8_safe(value: Any) -> Any:
    if isinstance(value, str):
        return value.encode("utf-8", "backslashreplace").decode("utf-8")
    if isinstance(value, dict):
        return {_utf8_safe(k): _utf8_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_utf8_safe(item) for item in value]
    return value


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistrationStorageError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
