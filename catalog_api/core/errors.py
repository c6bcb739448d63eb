"""
Error Handling Module

Defines the HTTP error taxonomy raised by the resource handlers and the
exception handlers that render every failure with the API's error envelope:

    {"error": "<message>"}                 single message
    {"errors": {"<field>": "<message>"}}   field validation failures
"""
import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

Detail = Union[str, Dict[str, str]]


class BadRequest(HTTPException):
    """Malformed payload or failed field validation (400)."""

    def __init__(self, detail: Detail = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class Unauthenticated(HTTPException):
    """Missing, invalid or expired credentials (401)."""

    def __init__(self, detail: str = "Unauthenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFound(HTTPException):
    """Resource absent or outside the caller's tenant (404)."""

    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Conflict(HTTPException):
    """Uniqueness violation on create (409)."""

    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class DuplicateEmailError(Exception):
    """Raised by repositories when an email is already taken in its scope."""

    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email


def _field_path(loc: Sequence[Union[str, int]]) -> str:
    return ".".join(str(part) for part in loc) or "__root__"


def validation_messages(errors: Sequence[Mapping[str, Any]], skip_location: bool = False) -> Dict[str, str]:
    """
    Collapse pydantic error dicts into a field path -> message mapping.

    Only the first message per field is kept. ``skip_location`` drops the
    leading ``body``/``query``/``path`` element FastAPI puts in ``loc``.
    """
    messages: Dict[str, str] = {}
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if skip_location and loc:
            loc = loc[1:]
        messages.setdefault(_field_path(loc), error.get("msg", "Invalid value"))
    return messages


def errors_from(exc: ValidationError) -> Dict[str, str]:
    return validation_messages(exc.errors())


def _envelope(detail: Optional[Detail]) -> Dict[str, Any]:
    if isinstance(detail, Mapping):
        return {"errors": dict(detail)}
    return {"error": detail if detail is not None else "Error"}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    if any(error.get("type") == "json_invalid" for error in exc.errors()):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid JSON"})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": validation_messages(exc.errors(), skip_location=True)},
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Store failure while handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": "Service temporarily unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to ``app``."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
