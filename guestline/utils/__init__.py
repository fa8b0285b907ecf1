"""
Utility modules for the GuestLine client
"""

from .redaction import (
    SecretRedactor,
    SecretRedactorFilter,
    get_default_redactor,
    redact_secrets,
    setup_logging_redaction
)

from .logging import (
    ClientLogger,
    StructuredFormatter,
    log_performance,
    sanitize_url,
    correlation_id
)

__all__ = [
    # Redaction
    "SecretRedactor",
    "SecretRedactorFilter",
    "get_default_redactor",
    "redact_secrets",
    "setup_logging_redaction",
    # Logging
    "ClientLogger",
    "StructuredFormatter",
    "log_performance",
    "sanitize_url",
    "correlation_id",
]
