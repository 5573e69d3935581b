"""Interceptor-aware HTTP service.

Every request issued by a resource goes through ``HttpService.request``:
request interceptors run, the transport sends, then response interceptors
(on success) or error interceptors (on failure) run. The verb helpers give
hand-written code the same treatment.
"""

import logging
from typing import Any, Iterable, Mapping

import httpx

from ..exceptions import TransportError
from ..interceptors import InterceptorPipeline
from ..request import RequestDescriptor
from ..serialization import encode_body
from .transport import Transport

logger = logging.getLogger("declarest")


class HttpService:
    """HTTP facade applying an interceptor pipeline around a transport.

    The interceptor list is fixed at construction; there is no way to add or
    remove interceptors afterwards.

    Usage:
        async with HttpService(HTTPTransport(config), [LoggingInterceptor()]) as http:
            response = await http.get("https://api.example.com/users", params={"page": 2})
    """

    def __init__(self, transport: Transport, interceptors: Iterable[Any] = ()):
        """Initialize the service.

        Args:
            transport: Transport that performs the network call
            interceptors: Interceptor instances, applied in this order
        """
        self.transport = transport
        self.pipeline = InterceptorPipeline(interceptors)

    async def __aenter__(self) -> "HttpService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close transport."""
        await self.close()

    async def close(self) -> None:
        """Close the underlying transport."""
        await self.transport.close()

    async def request(self, request: RequestDescriptor) -> httpx.Response:
        """Send a request through the interceptor pipeline.

        Args:
            request: Request to send; request interceptors may replace it

        Returns:
            The response after response interceptors ran

        Raises:
            TransportError: The failure after error interceptors ran (or
                whatever exception they replaced it with)
        """
        request = self.pipeline.apply_on_request(request)
        try:
            response = await self.transport.request(request)
        except TransportError as e:
            error = self.pipeline.apply_on_response_error(e)
            if error is e:
                raise
            raise error from e
        return self.pipeline.apply_on_response(response)

    def _descriptor(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> RequestDescriptor:
        return RequestDescriptor(
            method=method,
            url=url,
            headers=httpx.Headers(headers or {}),
            query=httpx.QueryParams(params or {}),
            body=encode_body(body),
        )

    async def get(self, url: str, headers: Mapping[str, str] | None = None, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """Send a GET request."""
        return await self.request(self._descriptor("GET", url, headers=headers, params=params))

    async def head(self, url: str, headers: Mapping[str, str] | None = None, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """Send a HEAD request."""
        return await self.request(self._descriptor("HEAD", url, headers=headers, params=params))

    async def delete(self, url: str, headers: Mapping[str, str] | None = None, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """Send a DELETE request."""
        return await self.request(self._descriptor("DELETE", url, headers=headers, params=params))

    async def post(self, url: str, body: Any = None, headers: Mapping[str, str] | None = None, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """Send a POST request; non-string bodies are JSON encoded."""
        return await self.request(self._descriptor("POST", url, body, headers, params))

    async def put(self, url: str, body: Any = None, headers: Mapping[str, str] | None = None, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """Send a PUT request; non-string bodies are JSON encoded."""
        return await self.request(self._descriptor("PUT", url, body, headers, params))

    async def patch(self, url: str, body: Any = None, headers: Mapping[str, str] | None = None, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """Send a PATCH request; non-string bodies are JSON encoded."""
        return await self.request(self._descriptor("PATCH", url, body, headers, params))
