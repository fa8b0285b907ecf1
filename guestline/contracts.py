"""
GuestLine Client Contracts
Uniform result envelope returned by every GuestLine operation
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar
from urllib.parse import urlparse


T = TypeVar("T")

# Status code reported when no HTTP status line was received
NO_STATUS = 0

# Fixed error messages
UNKNOWN_RESPONSE = "The GuestLine API returned an unknown response."
NO_ERROR_MESSAGE = "The GuestLine API returned an error status without an error message."
UNDECODABLE_ERROR = "The GuestLine API returned an error response that could not be decoded."
UNSUPPORTED_SERVICE = "The GuestLine service '{service}' is not supported."
BATCH_FAILED = "One or more reservations failed."

# Shown in place of a missing tracking id
UNTRACKABLE = "(untrackable)"


# Error types
class GuestLineError(Exception):
    """Base exception for GuestLine client errors"""

    pass


class UnsupportedServiceError(GuestLineError):
    """A request named a service with no configured base URL"""

    service: Optional[Any] = None


class ErrorSource(str, Enum):
    """Where a failure originated"""

    API = "api"  # reported by GuestLine
    LOCAL = "local"  # transport or serialization failure on our side
    UNKNOWN_RESPONSE = "unknown_response"  # protocol violation by the upstream
    VALIDATION = "validation"  # request rejected before sending


@dataclass(frozen=True)
class ErrorResponse:
    """Normalized error attached to a failed result"""

    error: str
    status: Optional[str] = None
    tracking_id: Optional[str] = None
    details: Optional[Dict[str, List[str]]] = None
    exception: Optional[BaseException] = None
    source: ErrorSource = ErrorSource.API

    @classmethod
    def from_exception(
        cls, exc: BaseException, source: ErrorSource = ErrorSource.LOCAL
    ) -> "ErrorResponse":
        return cls(error=str(exc) or type(exc).__name__, exception=exc, source=source)


@dataclass(frozen=True)
class RateLimiting:
    """Rate limit snapshot read from the response headers"""

    limit: int
    remaining: int


@dataclass(frozen=True)
class GuestLineResponse(Generic[T]):
    """
    Result of a GuestLine operation.

    Expected failures (transport errors, error statuses, undecodable bodies,
    local validation) are reported here rather than raised. `status_code` is
    NO_STATUS when the request never produced an HTTP status.
    """

    request_method: str
    request_uri: str
    is_success: bool
    status_code: int
    data: Optional[T] = None
    error: Optional[ErrorResponse] = None
    request_content: Optional[str] = None
    response_content: Optional[str] = None
    rate_limiting: Optional[RateLimiting] = None

    @property
    def has_data(self) -> bool:
        return self.data is not None

    @property
    def tracking_id(self) -> Optional[str]:
        """Tracking id of the payload, falling back to the error's"""
        data_tracking_id = getattr(self.data, "tracking_id", None)
        if data_tracking_id:
            return data_tracking_id
        if self.error is not None:
            return self.error.tracking_id
        return None

    def __str__(self) -> str:
        data_type = type(self.data).__name__ if self.data is not None else "None"
        path = urlparse(self.request_uri).path or "/"
        summary = f"{self.status_code} ({data_type}): {self.request_method} {path}"
        if self.error is not None:
            summary += f" - {self.error.error}"
        summary += f" [Tracking ID: {self.tracking_id or UNTRACKABLE}]"
        return summary
