"""Custom exceptions for declarest."""

from typing import Any


class DeclarestError(Exception):
    """Base exception for all declarest errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class BindingError(DeclarestError):
    """Call arguments do not satisfy the endpoint's parameter bindings."""
    pass


class SerializationError(DeclarestError):
    """A body or query value cannot be JSON encoded."""
    pass


class TransportError(DeclarestError):
    """The transport failed or the server returned a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


class TransportConnectionError(TransportError):
    """Cannot reach the server (connect error or timeout)."""
    pass


class TransportAuthError(TransportError):
    """Authentication failed (401/403)."""
    pass


class TransportNotFoundError(TransportError):
    """Resource not found (404)."""
    pass


def raise_for_status(status_code: int, message: str, response: Any = None) -> None:
    """Raise appropriate exception based on HTTP status code."""
    if status_code == 401 or status_code == 403:
        raise TransportAuthError(message, status_code, response)
    elif status_code == 404:
        raise TransportNotFoundError(message, status_code, response)
    elif status_code >= 400:
        raise TransportError(message, status_code, response)
