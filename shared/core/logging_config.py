"""
Structured logging configuration shared by the Eventra services.

Every record is rendered as a single JSON document so that the events and
payment services can be shipped to the same log pipeline. Request scoped
identifiers travel through context variables and are attached by
``RequestLoggingMiddleware`` and ``LoggerAdapter``.
"""

import json
import logging
import logging.handlers
import os
import re
import sys
import time
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

# Context variables for request tracking
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"


class StructuredFormatter(logging.Formatter):
    """JSON formatter carrying service identity and request trace context."""

    def __init__(self, service_name: str, version: str = "1.0.0", environment: Optional[str] = None):
        super().__init__()
        self.service_name = service_name
        self.version = version
        self.environment = environment or os.getenv("ENVIRONMENT", "development")

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "@timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "environment": self.environment,
            "version": self.version,
        }

        trace_context = self._get_trace_context(record)
        if trace_context:
            log_obj["trace"] = trace_context

        log_obj["location"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
            "module": record.module,
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_obj["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        if hasattr(record, 'extra_fields'):
            log_obj["custom"] = record.extra_fields

        if hasattr(record, 'duration_ms'):
            log_obj["performance"] = {"duration_ms": record.duration_ms}

        return json.dumps(log_obj, default=str)

    def _get_trace_context(self, record: logging.LogRecord) -> Optional[Dict[str, Any]]:
        request_id = getattr(record, "request_id", None) or request_id_var.get()
        correlation_id = getattr(record, "correlation_id", None) or correlation_id_var.get()

        context = {}
        if request_id:
            context["request_id"] = request_id
        if correlation_id:
            context["correlation_id"] = correlation_id
        return context or None


class SecurityFilter(logging.Filter):
    """Redacts values that look like credentials from log messages."""

    SENSITIVE_FIELDS = (
        'password', 'token', 'api_key', 'secret',
        'authorization', 'cookie', 'session',
    )

    # key=value, key: value, "key": "value" and "Authorization: Bearer <token>"
    PATTERN = re.compile(
        r"(?P<key>\b\w*?(?:" + "|".join(SENSITIVE_FIELDS) + r")\w*['\"]?\s*[=:]\s*['\"]?)"
        r"(?P<value>(?:bearer\s+)?[^\s,;&'\"}]+)",
        re.IGNORECASE,
    )
    MASK = "***REDACTED***"

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = self.PATTERN.sub(lambda m: m.group("key") + self.MASK, message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(
    service_name: str,
    level: str = "INFO",
    version: str = "1.0.0",
    enable_console: bool = True,
    log_file: Optional[str] = None,
) -> None:
    """
    Setup structured logging for a microservice.

    Args:
        service_name: Name of the microservice, stamped on every record
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        version: Service version, stamped on every record
        enable_console: Emit records on stdout
        log_file: Optional path of a rotating log file
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove handlers installed by a previous call
    for handler in list(root_logger.handlers):
        if getattr(handler, "_eventra_structured", False):
            root_logger.removeHandler(handler)

    formatter = StructuredFormatter(service_name, version)
    handlers = []

    if enable_console:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_file:
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10485760,  # 10MB
            backupCount=5,
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(SecurityFilter())
        handler._eventra_structured = True
        root_logger.addHandler(handler)

    logging.getLogger('uvicorn').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('stripe').setLevel(logging.WARNING)

    root_logger.info(
        "Logging initialized",
        extra={
            'extra_fields': {
                'service': service_name,
                'level': level,
                'handlers': {'console': enable_console, 'file': bool(log_file)},
            }
        },
    )


class LoggerAdapter(logging.LoggerAdapter):
    """Injects the current request and correlation ids into every record."""

    def process(self, msg, kwargs):
        extra = dict(kwargs.get('extra') or {})

        request_id = request_id_var.get()
        if request_id:
            extra['request_id'] = request_id

        correlation_id = correlation_id_var.get()
        if correlation_id:
            extra['correlation_id'] = correlation_id

        kwargs['extra'] = extra
        return msg, kwargs


def get_logger(name: str) -> LoggerAdapter:
    """Get a logger instance with request context support."""
    return LoggerAdapter(logging.getLogger(name), {})


def set_request_context(
    request_id: Optional[str] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """Bind request identifiers to the current execution context."""
    if request_id:
        request_id_var.set(request_id)
    if correlation_id:
        correlation_id_var.set(correlation_id)


def generate_request_id() -> str:
    return str(uuid.uuid4())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with its outcome and duration.

    The incoming ``X-Request-ID`` is reused when present, otherwise a new one
    is generated; either way it is echoed on the response.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        correlation_id = request.headers.get(CORRELATION_ID_HEADER)

        request_token = request_id_var.set(request_id)
        correlation_token = correlation_id_var.set(correlation_id)

        logger = get_logger(__name__)
        logger.info(
            f"Request started: {request.method} {request.url.path}",
            extra={
                'extra_fields': {
                    'method': request.method,
                    'path': request.url.path,
                    'client_host': request.client.host if request.client else None,
                }
            },
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time
            logger.info(
                f"Request completed: {request.method} {request.url.path}",
                extra={
                    'extra_fields': {
                        'method': request.method,
                        'path': request.url.path,
                        'status_code': response.status_code,
                    },
                    'duration_ms': duration * 1000,
                },
            )
        except Exception:
            duration = time.perf_counter() - start_time
            logger.error(
                f"Request failed: {request.method} {request.url.path}",
                exc_info=True,
                extra={
                    'extra_fields': {'method': request.method, 'path': request.url.path},
                    'duration_ms': duration * 1000,
                },
            )
            raise
        finally:
            request_id_var.reset(request_token)
            correlation_id_var.reset(correlation_token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
