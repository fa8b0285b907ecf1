"""
Logging Utilities for the GuestLine client
Provides structured logging with secret redaction and correlation IDs
"""

import logging
import json
import socket
import time
import uuid
from typing import Any, Dict, Optional
from contextvars import ContextVar
from functools import wraps
from datetime import datetime, timezone
from urllib.parse import urlparse, parse_qs, urlencode, urlunparse

from .redaction import SecretRedactorFilter, _RESERVED_RECORD_ATTRS

# Context variable for correlation ID
correlation_id: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)


class StructuredFormatter(logging.Formatter):
    """
    Structured JSON formatter for logs

    Outputs one JSON object per record
    """

    def __init__(self, service_name: str = "guestline-client"):
        super().__init__()
        self.service_name = service_name
        self.hostname = self._get_hostname()

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "@timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "hostname": self.hostname,
            "correlation_id": correlation_id.get(),
            "thread_name": record.threadName,
            "process_id": record.process,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS:
                log_obj[key] = value

        return json.dumps(log_obj, default=str)

    @staticmethod
    def _get_hostname():
        try:
            return socket.gethostname()
        except OSError:
            return "unknown"


class ClientLogger:
    """
    Logger for the GuestLine client

    Features:
    - Secret redaction
    - Correlation ID tracking
    - Per-call outcome and duration
    - Structured logging
    """

    def __init__(self, name: str, vendor: str = "guestline", partner_id: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.vendor = vendor
        self.partner_id = partner_id

        if not any(isinstance(f, SecretRedactorFilter) for f in self.logger.filters):
            self.logger.addFilter(SecretRedactorFilter())

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def with_correlation_id(self, correlation_id_val: Optional[str] = None) -> str:
        """Set or generate correlation ID for request tracking"""
        if correlation_id_val:
            correlation_id.set(correlation_id_val)
        else:
            correlation_id.set(str(uuid.uuid4()))
        return correlation_id.get()

    def _context(self, **kwargs) -> Dict[str, Any]:
        return {"vendor": self.vendor, "partner_id": self.partner_id, **kwargs}

    def log_api_call(self,
                     operation: str,
                     method: Optional[str] = None,
                     url: Optional[str] = None,
                     duration_ms: Optional[float] = None,
                     status_code: Optional[int] = None,
                     tracking_id: Optional[str] = None,
                     error: Optional[str] = None,
                     error_source: Optional[str] = None):
        """Log the outcome of one GuestLine round trip"""

        log_data = self._context(
            operation=operation,
            method=method,
            url=sanitize_url(url) if url else None,
            duration_ms=duration_ms,
            status_code=status_code,
            tracking_id=tracking_id,
        )

        if error:
            log_data["error"] = error
            log_data["error_source"] = error_source
            self.logger.warning(f"API call failed: {operation}", extra=log_data)
        else:
            self.logger.info(f"API call completed: {operation}", extra=log_data)

    def debug(self, msg: str, **kwargs):
        self.logger.debug(msg, extra=self._context(**kwargs))

    def info(self, msg: str, **kwargs):
        self.logger.info(msg, extra=self._context(**kwargs))

    def warning(self, msg: str, **kwargs):
        self.logger.warning(msg, extra=self._context(**kwargs))

    def error(self, msg: str, exc_info=None, **kwargs):
        self.logger.error(msg, exc_info=exc_info, extra=self._context(**kwargs))


def log_performance(operation: str):
    """
    Decorator to log duration and outcome of async client operations

    Results exposing `is_success` are logged as failures when unsuccessful.

    Usage:
        @log_performance("get_ari")
        async def get_ari(self, ...):
            ...
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            start_time = time.perf_counter()
            result = None
            error = None

            try:
                result = await func(self, *args, **kwargs)
                return result
            except Exception as e:
                error = e
                raise
            finally:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger = getattr(self, 'logger', None)

                if isinstance(logger, ClientLogger):
                    if error is not None:
                        logger.error(
                            f"{operation} raised in {duration_ms:.2f}ms: {error}",
                            operation=operation,
                            duration_ms=duration_ms,
                            error_type=type(error).__name__,
                        )
                    elif result is not None and getattr(result, 'is_success', True) is False:
                        result_error = getattr(result, 'error', None)
                        logger.warning(
                            f"{operation} failed in {duration_ms:.2f}ms",
                            operation=operation,
                            duration_ms=duration_ms,
                            status_code=getattr(result, 'status_code', None),
                            error=getattr(result_error, 'error', None),
                        )
                    else:
                        logger.debug(
                            f"{operation} completed in {duration_ms:.2f}ms",
                            operation=operation,
                            duration_ms=duration_ms,
                        )

        return wrapper
    return decorator


def sanitize_url(url: str) -> str:
    """
    Sanitize URL for logging by removing sensitive query parameters

    Args:
        url: URL to sanitize

    Returns:
        Sanitized URL safe for logging
    """
    sensitive_params = {
        'api_key', 'apikey', 'key', 'token', 'secret',
        'password', 'auth', 'authorization', 'access_token',
    }

    parsed = urlparse(url)
    query_params = parse_qs(parsed.query, keep_blank_values=True)

    sanitized_params = {}
    for param, values in query_params.items():
        if param.lower() in sensitive_params:
            sanitized_params[param] = ['<REDACTED>']
        else:
            sanitized_params[param] = values

    sanitized_query = urlencode(sanitized_params, doseq=True)
    return urlunparse((
        parsed.scheme,
        parsed.netloc,
        parsed.path,
        parsed.params,
        sanitized_query,
        parsed.fragment
    ))
