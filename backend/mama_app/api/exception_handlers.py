"""Exception handlers translating errors into JSON responses.

Error response format::

    {"detail": "Human-readable message"}
    {"detail": "The given data was invalid.", "errors": {"field": ["message"]}}
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mama_app.core.exceptions import DomainError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _clean_message(message: str) -> str:
    # pydantic prefixes errors raised from validators with "Value error, "
    prefix = "Value error, "
    if message.startswith(prefix):
        return message[len(prefix) :]
    return message


def request_errors_to_fields(errors: Sequence[dict[str, Any]]) -> dict[str, list[str]]:
    fields: dict[str, list[str]] = {}
    for error in errors:
        field = _field_name(error.get("loc", ()))
        fields.setdefault(field, []).append(_clean_message(str(error.get("msg", ""))))
    return fields


def _validation_response(errors: dict[str, list[str]], message: str) -> JSONResponse:
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"detail": message, "errors": errors},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the domain, request-validation and fallback handlers."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _validation_response(
            request_errors_to_fields(exc.errors()), ValidationError.default_message
        )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        logger.info(
            "%s on %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
        )
        if isinstance(exc, ValidationError):
            return _validation_response(exc.errors, exc.message)
        headers = (
            {"WWW-Authenticate": "Bearer"}
            if isinstance(exc, UnauthorizedError)
            else None
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
