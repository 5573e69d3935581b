"""Factories for transports and HTTP services.

Interceptors are passed in as ready-made instances; how they are built is
up to the caller.
"""

import logging
from typing import Any, Iterable

from .config import ClientConfig
from .service import HttpService
from .transport import Transport


def create_transport(config: ClientConfig | None = None) -> Transport:
    """Create the HTTP transport for a configuration.

    Args:
        config: Client configuration. If None, loads from environment.

    Returns:
        Configured transport implementing the Transport protocol.
    """
    from .http import HTTPTransport

    return HTTPTransport(config or ClientConfig())


def create_http_service(
    interceptors: Iterable[Any] = (),
    config: ClientConfig | None = None,
    transport: Transport | None = None,
) -> HttpService:
    """Create an HTTP service with a fixed interceptor chain.

    Also applies ``config.log_level`` to the "declarest" logger.

    Args:
        interceptors: Interceptor instances, in the order they should run
        config: Client configuration. If None, loads from environment.
        transport: Optional pre-configured transport (for testing/advanced use).
            If provided, config is only used for the log level.

    Returns:
        A ready-to-use HttpService

    Example:
        http = create_http_service([BearerTokenInterceptor(token), LoggingInterceptor()])
        users = UserResource(http)
    """
    config = config or ClientConfig()
    logging.getLogger("declarest").setLevel(config.log_level)
    return HttpService(transport or create_transport(config), interceptors)
