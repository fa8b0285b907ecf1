"""
Secret Redaction for GuestLine client logs
Masks bearer tokens, API keys and guest contact details before records are emitted
"""

import logging
import re
from typing import Any, Dict, List, Optional


# LogRecord attributes that are never user supplied
_RESERVED_RECORD_ATTRS = {
    "name", "msg", "args", "created", "msecs", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "exc_info", "exc_text",
    "stack_info", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "taskName", "message", "asctime",
}


class SecretRedactor:
    """
    Redactor for credentials and guest contact details

    Detects and redacts:
    - Bearer tokens
    - apikey values in JSON bodies and query strings
    - Email addresses
    """

    BEARER_PATTERN = r"(Bearer\s+)[A-Za-z0-9\-._~+/=]+"
    JSON_API_KEY_PATTERN = r'("(?:apikey|api_key)"\s*:\s*")[^"]*(")'
    QUERY_API_KEY_PATTERN = r"\b((?:apikey|api_key)=)[^&\s]+"
    EMAIL_PATTERN = r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"

    DEFAULT_SENSITIVE_KEYS = [
        "apikey",
        "api_key",
        "authorization",
        "password",
        "secret",
        "token",
        "email",
        "telephone",
    ]

    def __init__(self, mask: str = "<REDACTED>", sensitive_keys: Optional[List[str]] = None):
        self.mask = mask
        self.sensitive_keys = set(self.DEFAULT_SENSITIVE_KEYS + (sensitive_keys or []))

    def redact_text(self, text: str) -> str:
        text = re.sub(self.BEARER_PATTERN, rf"\1{self.mask}", text)
        text = re.sub(self.JSON_API_KEY_PATTERN, rf"\1{self.mask}\2", text, flags=re.IGNORECASE)
        text = re.sub(self.QUERY_API_KEY_PATTERN, rf"\1{self.mask}", text, flags=re.IGNORECASE)
        text = re.sub(self.EMAIL_PATTERN, "<EMAIL>", text)
        return text

    def redact_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Redact values under sensitive keys and scrub nested strings"""

        def _redact_value(key: str, value: Any) -> Any:
            if key.lower() in self.sensitive_keys and value is not None:
                return self.mask
            if isinstance(value, dict):
                return self.redact_dict(value)
            if isinstance(value, list):
                return [_redact_value(key, item) for item in value]
            if isinstance(value, str):
                return self.redact_text(value)
            return value

        return {k: _redact_value(str(k), v) for k, v in data.items()}

    def redact_log_record(self, record: logging.LogRecord) -> logging.LogRecord:
        if isinstance(record.msg, str):
            record.msg = self.redact_text(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = self.redact_dict(record.args)
            else:
                record.args = tuple(
                    self.redact_text(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        # Extra fields
        for key, value in list(record.__dict__.items()):
            if key in _RESERVED_RECORD_ATTRS or value is None:
                continue
            if key.lower() in self.sensitive_keys:
                setattr(record, key, self.mask)
            elif isinstance(value, str):
                setattr(record, key, self.redact_text(value))
            elif isinstance(value, dict):
                setattr(record, key, self.redact_dict(value))

        return record


class SecretRedactorFilter(logging.Filter):
    """
    Logging filter that redacts secrets from every record

    Usage:
        logger = logging.getLogger(__name__)
        logger.addFilter(SecretRedactorFilter())
    """

    def __init__(self, redactor: Optional[SecretRedactor] = None):
        super().__init__()
        self.redactor = redactor or get_default_redactor()

    def filter(self, record: logging.LogRecord) -> bool:
        self.redactor.redact_log_record(record)
        return True


_default_redactor = None


def get_default_redactor() -> SecretRedactor:
    """Get or create the default redactor instance"""
    global _default_redactor
    if _default_redactor is None:
        _default_redactor = SecretRedactor()
    return _default_redactor


def redact_secrets(text: str) -> str:
    return get_default_redactor().redact_text(text)


def setup_logging_redaction(logger: Optional[logging.Logger] = None):
    """
    Set up secret redaction for logging

    Args:
        logger: Logger to configure (None for root logger)
    """
    target_logger = logger or logging.getLogger()

    for existing in target_logger.filters:
        if isinstance(existing, SecretRedactorFilter):
            return

    target_logger.addFilter(SecretRedactorFilter())

    for handler in target_logger.handlers:
        handler.addFilter(SecretRedactorFilter())
