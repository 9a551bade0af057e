# app/core/errors.py
from __future__ import annotations

import logging
import traceback
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings

log = logging.getLogger("app.errors")


# -----------------------------
# Domain error taxonomy
# -----------------------------
class AppError(Exception):
    status_code = 500
    default_message = "Internal server error."

    def __init__(self, message: Optional[str] = None, *, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing/invalid fields or a status outside the whitelist."""

    status_code = 400
    default_message = "Validation failed."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    """Operation blocked by the current state of the resource (e.g. deleting an active report)."""

    status_code = 400
    default_message = "Operation not allowed in the current state."


class PersistenceError(AppError):
    """Raised by transaction() when a statement or the commit fails; the cause is chained."""

    status_code = 500
    default_message = "A database error occurred."


# -----------------------------
# Trace / request id helpers
# -----------------------------
def _ensure_trace_id(request: Request) -> str:
    """
    The id RequestLoggingMiddleware put on request.state; falls back to the
    incoming header or a fresh id when the middleware is not installed.
    """
    trace_id = getattr(request.state, "trace_id", None)
    if not trace_id:
        trace_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.trace_id = trace_id
    return str(trace_id)


def _payload(
    *,
    message: str,
    trace_id: str,
    details: Optional[Any] = None,
    exc: Optional[BaseException] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "status": "error",
        "message": message,
        "traceId": trace_id,
    }
    if details is not None:
        body["details"] = jsonable_encoder(details)
    if exc is not None and not get_settings().is_production:
        body["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return body


def _respond(status_code: int, trace_id: str, body: Dict[str, Any], headers=None) -> JSONResponse:
    headers = dict(headers or {})
    headers["X-Request-ID"] = trace_id
    return JSONResponse(status_code=status_code, headers=headers, content=body)


# -----------------------------
# Install / register handlers
# -----------------------------
def register_exception_handlers(app: FastAPI) -> None:
    """
    Registers consistent JSON error handlers.
    Also ensures X-Request-ID header is present on error responses.
    """

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        trace_id = _ensure_trace_id(request)
        status_code = exc.status_code
        if status_code >= 500:
            log.error(
                "%s %s %s -> %s | trace_id=%s | %s",
                type(exc).__name__,
                request.method,
                request.url.path,
                status_code,
                trace_id,
                exc.message,
                exc_info=exc,
            )
        else:
            log.warning(
                "%s %s %s -> %s | trace_id=%s | %s",
                type(exc).__name__,
                request.method,
                request.url.path,
                status_code,
                trace_id,
                exc.message,
            )
        return _respond(
            status_code,
            trace_id,
            _payload(
                message=exc.message,
                trace_id=trace_id,
                details=exc.details,
                exc=exc if status_code >= 500 else None,
            ),
        )

    @app.exception_handler(SQLAlchemyError)
    async def persistence_exc_handler(request: Request, exc: SQLAlchemyError):
        trace_id = _ensure_trace_id(request)
        log.exception(
            "PersistenceError %s %s -> 500 | trace_id=%s",
            request.method,
            request.url.path,
            trace_id,
        )
        return _respond(
            500,
            trace_id,
            _payload(
                message=PersistenceError.default_message,
                trace_id=trace_id,
                exc=exc,
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):
        trace_id = _ensure_trace_id(request)
        status_code = int(exc.status_code)
        if status_code == 404 and exc.detail == "Not Found":
            message = f"Route {request.url.path} not found"
        else:
            message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        details = exc.detail if isinstance(exc.detail, dict) else None

        level = logging.ERROR if status_code >= 500 else logging.WARNING
        log.log(
            level,
            "HTTPException %s %s -> %s | trace_id=%s | detail=%r",
            request.method,
            request.url.path,
            status_code,
            trace_id,
            exc.detail,
        )
        return _respond(
            status_code,
            trace_id,
            _payload(message=message, trace_id=trace_id, details=details),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        trace_id = _ensure_trace_id(request)
        errors = exc.errors()
        log.warning(
            "ValidationError %s %s -> 400 | trace_id=%s | errors=%s",
            request.method,
            request.url.path,
            trace_id,
            errors,
        )
        return _respond(
            400,
            trace_id,
            _payload(
                message=_summarize(errors),
                trace_id=trace_id,
                details=errors,
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):
        trace_id = _ensure_trace_id(request)
        # Full traceback to server logs; generic message to client
        log.exception(
            "Unhandled exception %s %s -> 500 | trace_id=%s",
            request.method,
            request.url.path,
            trace_id,
        )
        return _respond(
            500,
            trace_id,
            _payload(message="Internal server error.", trace_id=trace_id, exc=exc),
        )


def _summarize(errors) -> str:
    """Human-readable one-liner, e.g. 'categoryId: Field required'."""
    parts = []
    for e in errors:
        loc = [str(p) for p in e.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {e.get('msg', 'invalid')}")
    return "; ".join(parts) or "Validation failed."
