"""HTTP plumbing for declarest resources.

Resources send every request through an HttpService, which applies the
interceptor pipeline around a Transport. The default transport is httpx.

Usage:
    from declarest.client import ClientConfig, create_http_service

    config = ClientConfig(api_url="https://api.example.com")
    http = create_http_service([LoggingInterceptor()], config)
    users = UserResource(http)
"""

from .config import ClientConfig
from .factory import create_http_service, create_transport
from .http import HTTPTransport
from .service import HttpService
from .transport import Transport

__all__ = [
    # Service and factory
    "HttpService",
    "create_http_service",
    "create_transport",
    # Transport protocol and implementation
    "Transport",
    "HTTPTransport",
    # Configuration
    "ClientConfig",
]
