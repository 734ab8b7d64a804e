"""
Centralized error handling and logging.

Repositories let driver errors propagate; this module maps them to HTTP
responses in one place and logs each failure as a structured JSON entry
tagged with a trace id.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from contextvars import ContextVar

import asyncpg
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from crud_backend.repositories.base import RecordNotFoundError

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)


class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    SANITIZE_SENSITIVE_FIELDS = True
    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'key', 'secret', 'authorization', 'auth', 'credential'
    ]

    LOG_HEADERS = True
    MAX_BODY_LOG_SIZE = 5000

    INCLUDE_TRACE_ID = True
    INCLUDE_TIMESTAMP = True

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Union[Dict, str, Any]) -> Any:
        """Recursively redact sensitive values and truncate long strings"""
        if not cls.SANITIZE_SENSITIVE_FIELDS:
            return data

        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(str(key)) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, list):
            return [cls.sanitize_data(item) for item in data]
        elif isinstance(data, str) and len(data) > cls.MAX_BODY_LOG_SIZE:
            return data[:cls.MAX_BODY_LOG_SIZE] + "...[TRUNCATED]"
        else:
            return data


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True,
        level: int = logging.ERROR
    ) -> str:
        """Log a structured error entry and return its trace id"""
        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": _utcnow_iso(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": logging.getLevelName(level)
        }

        if request:
            headers = dict(request.headers)
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": ErrorHandlingConfig.sanitize_data(headers) if ErrorHandlingConfig.LOG_HEADERS else {},
                "client_ip": request.client.host if request.client else None
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
                "module": getattr(exception, '__module__', 'unknown')
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = ErrorHandlingConfig.sanitize_data(extra_context)

        logger.log(level, json.dumps(log_entry, indent=2, default=str))
        return trace_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a trace id to every request and echo it in X-Trace-ID.

    Unhandled exceptions are turned into the 500 response here, while the
    request's trace id is still set, so body and header agree.
    """

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        token = request_id_var.set(trace_id)
        request.state.trace_id = trace_id
        try:
            try:
                response = await call_next(request)
            except Exception as e:
                response = await general_exception_handler(request, e)
            response.headers["X-Trace-ID"] = trace_id
            return response
        finally:
            request_id_var.reset(token)


def _error_response(status_code: int, error: str, message: Any, trace_id: Optional[str] = None, **extra) -> JSONResponse:
    content = {"error": error, "message": message}
    content.update(extra)
    if ErrorHandlingConfig.INCLUDE_TRACE_ID and trace_id:
        content["trace_id"] = trace_id
    if ErrorHandlingConfig.INCLUDE_TIMESTAMP:
        content["timestamp"] = _utcnow_iso()
    return JSONResponse(status_code=status_code, content=content)


def _driver_message(exc: asyncpg.PostgresError) -> str:
    return getattr(exc, "detail", None) or getattr(exc, "message", None) or str(exc)


# Global exception handlers
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    trace_id = None
    if exc.status_code >= 500:
        trace_id = StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            exception=exc
        )
    return _error_response(exc.status_code, f"HTTP {exc.status_code}", exc.detail, trace_id)


async def not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path}: {exc}")
    return _error_response(404, "Not Found", str(exc))


async def integrity_error_handler(request: Request, exc: asyncpg.IntegrityConstraintViolationError) -> JSONResponse:
    """Unique, foreign-key and not-null violations raised by the database"""
    trace_id = StructuredLogger.log_error(
        "constraint_violation",
        f"Constraint violation: {type(exc).__name__}",
        request=request,
        exception=exc,
        extra_context={"constraint": getattr(exc, "constraint_name", None)},
        include_traceback=False,
        level=logging.WARNING
    )
    return _error_response(409, "Conflict", _driver_message(exc), trace_id)


async def data_error_handler(request: Request, exc: asyncpg.DataError) -> JSONResponse:
    trace_id = StructuredLogger.log_error(
        "invalid_value",
        f"Database rejected a value: {type(exc).__name__}",
        request=request,
        exception=exc,
        include_traceback=False,
        level=logging.WARNING
    )
    return _error_response(400, "Bad Request", _driver_message(exc), trace_id)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI validation errors (HTTP 422)"""
    validation_details = [
        {
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "unknown")
        }
        for error in exc.errors()
    ]

    trace_id = StructuredLogger.log_error(
        "validation_error_422",
        f"Request validation failed: {len(validation_details)} validation errors",
        request=request,
        extra_context={"validation_errors": validation_details},
        include_traceback=False,
        level=logging.WARNING
    )

    return _error_response(
        422,
        "Validation Error",
        "Request validation failed",
        trace_id,
        detail=validation_details,
        error_count=len(validation_details)
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internals"""
    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc
    )
    return _error_response(500, "Internal Server Error", "An unexpected error occurred", trace_id)


def setup_error_handling(app):
    """Register the request-context middleware and exception handlers"""
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RecordNotFoundError, not_found_handler)
    app.add_exception_handler(asyncpg.IntegrityConstraintViolationError, integrity_error_handler)
    app.add_exception_handler(asyncpg.DataError, data_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")
