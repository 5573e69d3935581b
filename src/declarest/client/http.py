"""HTTP transport backed by httpx.

This module implements the Transport protocol with an ``httpx.AsyncClient``.
Network failures and error statuses are mapped to the declarest exception
hierarchy so interceptors see one error type whatever went wrong.
"""

import logging
from typing import TYPE_CHECKING

import httpx

from ..exceptions import TransportConnectionError, TransportError, raise_for_status
from .config import ClientConfig

if TYPE_CHECKING:
    from ..request import RequestDescriptor

logger = logging.getLogger("declarest")

# Request extensions httpx and httpcore act on; other keys stay with interceptors
HTTPX_EXTENSIONS = frozenset({"timeout", "trace", "sni_hostname", "target"})


class HTTPTransport:
    """HTTP transport over httpx.

    Implements the Transport protocol. Cancelling the task awaiting
    ``request`` cancels the underlying httpx call.

    Usage:
        transport = HTTPTransport(config)
        response = await transport.request(descriptor)
        await transport.close()

    Or as async context manager:
        async with HTTPTransport(config) as transport:
            response = await transport.request(descriptor)
    """

    def __init__(self, config: ClientConfig | None = None, client: httpx.AsyncClient | None = None):
        """Initialize HTTP transport.

        Args:
            config: Client configuration. If None, loads from environment.
            client: Optional pre-built httpx client (for testing or advanced use).
        """
        self.config = config or ClientConfig()
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.api_url or "",
                timeout=self.config.timeout,
                follow_redirects=self.config.follow_redirects,
                verify=self.config.verify_ssl,
            )
        return self._client

    async def __aenter__(self) -> "HTTPTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close client."""
        await self.close()

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _error_message(self, response: httpx.Response) -> str:
        """Extract an error message from an error response.

        Args:
            response: HTTP response object

        Returns:
            The "error", "detail" or "message" field of a JSON body, else the text
        """
        try:
            error_data = response.json()
            if isinstance(error_data, dict):
                return (
                    error_data.get("error")
                    or error_data.get("detail")
                    or error_data.get("message")
                    or str(error_data)
                )
            return str(error_data)
        except ValueError:
            return response.text or f"HTTP {response.status_code}"

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Raise for error statuses, otherwise return the response.

        Raises:
            TransportAuthError: For 401/403 responses
            TransportNotFoundError: For 404 responses
            TransportError: For other 4xx/5xx responses
        """
        if response.status_code >= 400:
            raise_for_status(response.status_code, self._error_message(response), response)
        return response

    async def request(self, request: "RequestDescriptor") -> httpx.Response:
        """Send a request.

        Args:
            request: The fully built request

        Returns:
            The response with its body read
        """
        http_request = self.client.build_request(
            request.method,
            request.url,
            params=request.query,
            headers=request.headers,
            content=request.body,
            extensions={k: v for k, v in request.extensions.items() if k in HTTPX_EXTENSIONS},
        )
        try:
            response = await self.client.send(http_request)
        except httpx.ConnectError as e:
            raise TransportConnectionError(f"Cannot connect to {request.url}: {e}") from e
        except httpx.TimeoutException as e:
            raise TransportConnectionError(f"Request timeout to {request.url}: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e

        logger.debug(f"{request.method} {http_request.url} -> {response.status_code}")
        return self._handle_response(response)
