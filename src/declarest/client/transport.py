"""Transport protocol.

This module defines the interface the HTTP service sends requests through.
The transport performs the network call only: interceptors, body encoding
and response decoding happen around it.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx

if TYPE_CHECKING:
    from ..request import RequestDescriptor


@runtime_checkable
class Transport(Protocol):
    """Protocol defining the transport interface.

    Transports are responsible for:
    - Issuing the request (verb, URL, headers, query, body)
    - Returning the response of a successful exchange
    - Raising TransportError for network failures and non-success statuses
    """

    async def request(self, request: "RequestDescriptor") -> httpx.Response:
        """Send a request.

        Args:
            request: The fully built request

        Returns:
            The response, body already read

        Raises:
            TransportConnectionError: If unable to connect or timed out
            TransportAuthError: If authentication fails (401/403)
            TransportNotFoundError: If resource not found (404)
            TransportError: For other failures and error statuses
        """
        ...

    async def close(self) -> None:
        """Clean up resources (connection pools, clients, etc.).

        Safe to call multiple times.
        """
        ...
