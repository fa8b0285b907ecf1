"""
GuestLine API client core
Builds wire requests and turns every transport outcome into a GuestLineResponse
"""

import asyncio
import time
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union

import httpx
from pydantic import Field, TypeAdapter, field_validator

from .contracts import (
    NO_ERROR_MESSAGE,
    NO_STATUS,
    UNDECODABLE_ERROR,
    UNKNOWN_RESPONSE,
    UNSUPPORTED_SERVICE,
    ErrorResponse,
    ErrorSource,
    GuestLineResponse,
    RateLimiting,
    UnsupportedServiceError,
)
from .primitives.models import WireModel
from .request import GuestLineRequest, GuestLineService
from .settings import GuestLineSettings
from .utils.logging import ClientLogger

T = TypeVar("T")

RATE_LIMIT_HEADER = "X-Ratelimit-Limit"
RATE_LIMIT_REMAINING_HEADER = "X-Ratelimit-Remaining"

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@lru_cache(maxsize=None)
def _type_adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


class ErrorBody(WireModel):
    """Error payload GuestLine sends with a non-2xx status"""

    error: Optional[str] = None
    message: Optional[str] = None
    code: Optional[str] = None
    errors: Optional[Union[List[str], Dict[str, Union[str, List[str]]]]] = None
    status: Optional[str] = None
    tracking_id: Optional[str] = Field(default=None, alias="trackingId")

    @field_validator("code", "status", mode="before")
    @classmethod
    def coerce_to_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    def detail_messages(self) -> List[str]:
        if not self.errors:
            return []
        if isinstance(self.errors, list):
            return [e for e in self.errors if e]
        messages: List[str] = []
        for value in self.errors.values():
            if isinstance(value, str):
                messages.append(value)
            else:
                messages.extend(v for v in value if v)
        return messages

    def details(self) -> Optional[Dict[str, List[str]]]:
        if not self.errors:
            return None
        if isinstance(self.errors, list):
            return {"errors": list(self.errors)}
        return {
            key: [value] if isinstance(value, str) else list(value)
            for key, value in self.errors.items()
        }

    def assemble_message(self) -> str:
        """Build `code: message; detail; detail` without trailing separators"""
        text = ""
        if self.code:
            text += f"{self.code}: "
        primary = self.message or self.error
        if primary:
            text += f"{primary}; "
        text += "; ".join(self.detail_messages())
        return text.rstrip().rstrip(";:").rstrip()


class ApiClient:
    """
    Base GuestLine API client.

    Every expected failure (transport error, error status, empty or
    undecodable body) comes back as an unsuccessful GuestLineResponse.
    Only an unsupported service raises, and cancellation propagates.
    """

    def __init__(self, http: httpx.AsyncClient, settings: GuestLineSettings):
        if http is None:
            raise ValueError("http must not be None")
        if settings is None:
            raise ValueError("settings must not be None")

        self._http = http
        self._settings = settings
        self._service_base_url = settings.resolve_service_base_url()
        self._book_base_url = settings.resolve_book_base_url()

        self.logger = ClientLogger(name=__name__, partner_id=settings.partner_id)

    @property
    def settings(self) -> GuestLineSettings:
        return self._settings

    @property
    def service_base_url(self) -> str:
        return self._service_base_url

    @property
    def book_base_url(self) -> str:
        return self._book_base_url

    # Send and fetch
    async def send(self, request: GuestLineRequest) -> GuestLineResponse[None]:
        """Execute a request whose response carries no payload"""
        if request is None:
            raise ValueError("request must not be None")
        return await self._execute(request, None)

    async def fetch(
        self, request: GuestLineRequest, response_type: Type[T]
    ) -> GuestLineResponse[T]:
        """Execute a request and decode the success body as `response_type`"""
        if request is None:
            raise ValueError("request must not be None")
        return await self._execute(request, response_type)

    async def _execute(
        self, request: GuestLineRequest, response_type: Optional[Any]
    ) -> GuestLineResponse:
        uri = self.resolve_url(request)
        method = request.method.upper()
        operation = getattr(request.data, "action", None) or request.service.value
        request_content: Optional[str] = None
        start_time = time.perf_counter()

        try:
            http_request, request_content = self._build_http_request(request, method, uri)
            http_response = await self._http.send(http_request)
            result = await self.transform_response(
                method, uri, http_response, response_type, request_content
            )
        except asyncio.CancelledError:
            self.logger.warning(
                f"API call cancelled: {operation}", operation=operation, method=method
            )
            raise
        except Exception as e:
            result = GuestLineResponse(
                request_method=method,
                request_uri=uri,
                is_success=False,
                status_code=NO_STATUS,
                error=ErrorResponse.from_exception(e, ErrorSource.LOCAL),
                request_content=request_content,
            )

        self.logger.log_api_call(
            operation=operation,
            method=method,
            url=uri,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            status_code=result.status_code,
            tracking_id=result.tracking_id,
            error=result.error.error if result.error else None,
            error_source=result.error.source.value if result.error else None,
        )
        return result

    # Preprocessing
    def resolve_url(self, request: GuestLineRequest) -> str:
        """Absolute URL for the request's service, path and query"""
        if request.service == GuestLineService.BOOK:
            base_url = self._book_base_url
        elif request.service == GuestLineService.ARI:
            base_url = self._service_base_url
        else:
            error = UnsupportedServiceError(UNSUPPORTED_SERVICE.format(service=request.service))
            error.service = request.service
            raise error

        url = base_url
        if request.path:
            url = f"{base_url.rstrip('/')}/{request.path.lstrip('/')}"
        if request.query:
            url = str(httpx.URL(url).copy_merge_params(dict(request.query)))
        return url

    def create_http_request(self, request: GuestLineRequest) -> Tuple[httpx.Request, Optional[str]]:
        """Build the wire request, returning the captured body text when capture is on"""
        return self._build_http_request(request, request.method.upper(), self.resolve_url(request))

    def _build_http_request(
        self, request: GuestLineRequest, method: str, uri: str
    ) -> Tuple[httpx.Request, Optional[str]]:
        headers = {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Accept": "application/json",
        }
        content: Optional[bytes] = None
        captured: Optional[str] = None

        if request.data is not None:
            if self._settings.capture_request_content:
                captured = self.serialize(request.data).decode("utf-8")
                content = captured.encode("utf-8")
            else:
                content = self.serialize(request.data)
            headers["Content-Type"] = JSON_CONTENT_TYPE

        return httpx.Request(method, uri, headers=headers, content=content), captured

    @staticmethod
    def serialize(data: Any) -> bytes:
        """JSON by wire alias with unset (None) fields omitted"""
        return _type_adapter(type(data)).dump_json(data, by_alias=True, exclude_none=True)

    # Postprocessing
    async def transform_response(
        self,
        method: str,
        uri: str,
        response: httpx.Response,
        response_type: Optional[Any],
        request_content: Optional[str] = None,
    ) -> GuestLineResponse:
        common: Dict[str, Any] = dict(
            request_method=method,
            request_uri=uri,
            status_code=response.status_code,
            request_content=request_content,
            rate_limiting=self._parse_rate_limiting(response.headers),
        )

        # A status was received, so read failures keep it
        try:
            body = await response.aread()
        except Exception as e:
            return GuestLineResponse(
                is_success=False,
                error=ErrorResponse.from_exception(e, ErrorSource.LOCAL),
                **common,
            )

        is_success_status = response.is_success
        text = response.text if body else ""
        if self._settings.capture_response_content or not is_success_status:
            common["response_content"] = text

        if not is_success_status:
            return GuestLineResponse(is_success=False, error=self._read_error(text), **common)

        if response_type is None:
            return GuestLineResponse(is_success=True, **common)

        stripped = body.strip()
        if not stripped or stripped == b"null":
            return GuestLineResponse(
                is_success=False,
                error=ErrorResponse(error=UNKNOWN_RESPONSE, source=ErrorSource.UNKNOWN_RESPONSE),
                **common,
            )

        try:
            data = _type_adapter(response_type).validate_json(body)
        except Exception as e:
            return GuestLineResponse(
                is_success=False,
                error=ErrorResponse.from_exception(e, ErrorSource.LOCAL),
                **common,
            )

        return GuestLineResponse(is_success=True, data=data, **common)

    def _read_error(self, text: str) -> ErrorResponse:
        if not text or not text.strip():
            return ErrorResponse(error=NO_ERROR_MESSAGE, source=ErrorSource.API)

        try:
            body = ErrorBody.model_validate_json(text)
        except ValueError as e:
            return ErrorResponse(
                error=UNDECODABLE_ERROR, exception=e, source=ErrorSource.UNKNOWN_RESPONSE
            )

        message = body.assemble_message()
        if not message:
            return ErrorResponse(
                error=UNKNOWN_RESPONSE,
                status=body.status,
                tracking_id=body.tracking_id,
                source=ErrorSource.UNKNOWN_RESPONSE,
            )

        return ErrorResponse(
            error=message,
            status=body.status,
            tracking_id=body.tracking_id,
            details=body.details(),
            source=ErrorSource.API,
        )

    @staticmethod
    def _parse_rate_limiting(headers: Mapping[str, str]) -> Optional[RateLimiting]:
        limit = headers.get(RATE_LIMIT_HEADER)
        remaining = headers.get(RATE_LIMIT_REMAINING_HEADER)
        if limit is None or remaining is None:
            return None
        try:
            return RateLimiting(limit=int(limit), remaining=int(remaining))
        except ValueError:
            return None
