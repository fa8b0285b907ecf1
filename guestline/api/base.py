"""
Shared pre-flight steps for GuestLine operation groups
"""

from typing import Optional, Tuple, Type, TypeVar

from ..api_client import ApiClient
from ..contracts import NO_STATUS, ErrorResponse, ErrorSource, GuestLineResponse
from ..primitives.requests import GuestLineRequestBase, group_failures
from ..request import GuestLineRequest, GuestLineService

T = TypeVar("T")
TRequest = TypeVar("TRequest", bound=GuestLineRequestBase)

REQUEST_METHOD = "POST"


class OperationsBase:
    """Base for operation groups bound to one ApiClient"""

    def __init__(self, client: ApiClient):
        self._client = client
        self.logger = client.logger

    def with_defaults(self, request: TRequest) -> TRequest:
        """Copy of the request with apikey/version filled from settings when unset"""
        settings = self._client.settings
        update = {}
        if request.api_key is None:
            update["api_key"] = settings.api_key
        if request.version is None:
            update["version"] = settings.version
        return request.model_copy(update=update) if update else request

    def preflight(
        self, service: GuestLineService, request: Optional[TRequest]
    ) -> Tuple[TRequest, Optional[GuestLineResponse]]:
        """
        Fill defaults and validate.

        Returns the prepared request and, when a rule is violated, the failure
        result to hand back instead of calling GuestLine.

        Raises:
            ValueError: If request is None
        """
        if request is None:
            raise ValueError("request must not be None")

        prepared = self.with_defaults(request)
        failures = prepared.validate_request()
        if not failures:
            return prepared, None

        self.logger.info(
            "Request rejected by validation",
            action=prepared.action,
            fields=sorted({field for field, _ in failures}),
        )
        uri = self._client.resolve_url(GuestLineRequest(service=service))
        return prepared, GuestLineResponse(
            request_method=REQUEST_METHOD,
            request_uri=uri,
            is_success=False,
            status_code=NO_STATUS,
            error=ErrorResponse(
                error=failures[0][1],
                details=group_failures(failures),
                source=ErrorSource.VALIDATION,
            ),
        )

    async def fetch(
        self, service: GuestLineService, request: Optional[TRequest], response_type: Type[T]
    ) -> GuestLineResponse[T]:
        prepared, failure = self.preflight(service, request)
        if failure is not None:
            return failure
        return await self._client.fetch(
            GuestLineRequest(service=service, method=REQUEST_METHOD, data=prepared),
            response_type,
        )
