"""Interceptor pipeline for outgoing requests and incoming responses.

Interceptors implement cross-cutting policies (auth headers, logging, error
enrichment) once for every resource. An interceptor may define any subset of
three hooks:

- ``on_request(request)`` before the request is sent
- ``on_response(response)`` after a successful response, before decoding
- ``on_response_error(error)`` after a transport failure

Each hook returns the value to hand to the next interceptor. Returning None
keeps the current value. Hooks are synchronous; an ``async def`` hook is
rejected.
"""

import inspect
import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping

import httpx

if TYPE_CHECKING:
    from .request import RequestDescriptor

logger = logging.getLogger("declarest")

HOOKS = ("on_request", "on_response", "on_response_error")


class HttpInterceptor:
    """Base class for interceptors; every hook is a pass-through.

    Subclassing is optional. The pipeline accepts any object that has at
    least one of the hook methods.
    """

    def on_request(self, request: "RequestDescriptor") -> "RequestDescriptor":
        return request

    def on_response(self, response: httpx.Response) -> httpx.Response:
        return response

    def on_response_error(self, error: BaseException) -> BaseException:
        return error


class InterceptorPipeline:
    """Ordered, immutable chain of interceptors.

    Each fold runs left to right in registration order; every interceptor
    receives the output of its predecessor. Interceptors lacking a hook are
    skipped for that fold.

    Usage:
        pipeline = InterceptorPipeline([BearerTokenInterceptor(token), LoggingInterceptor()])
        request = pipeline.apply_on_request(request)
    """

    def __init__(self, interceptors: Iterable[Any] = ()):
        self._interceptors = tuple(interceptors)
        for interceptor in self._interceptors:
            if not any(callable(getattr(interceptor, hook, None)) for hook in HOOKS):
                raise TypeError(
                    f"{type(interceptor).__name__} defines none of {', '.join(HOOKS)}"
                )
        # Hook lists are resolved once; the chain never changes afterwards
        self._chains = {
            hook: tuple(
                getattr(interceptor, hook)
                for interceptor in self._interceptors
                if callable(getattr(interceptor, hook, None))
            )
            for hook in HOOKS
        }

    @property
    def interceptors(self) -> tuple[Any, ...]:
        """Installed interceptors, in order."""
        return self._interceptors

    def __len__(self) -> int:
        return len(self._interceptors)

    def _fold(self, hook: str, value: Any) -> Any:
        for fn in self._chains[hook]:
            result = fn(value)
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                name = getattr(fn, "__qualname__", repr(fn))
                raise TypeError(f"{name} must be synchronous")
            if result is not None:
                value = result
        return value

    def apply_on_request(self, request: "RequestDescriptor") -> "RequestDescriptor":
        """Run every ``on_request`` hook over an outgoing request."""
        logger.debug(f"Applying {len(self._chains['on_request'])} request interceptor(s)")
        return self._fold("on_request", request)

    def apply_on_response(self, response: httpx.Response) -> httpx.Response:
        """Run every ``on_response`` hook over a successful response."""
        return self._fold("on_response", response)

    def apply_on_response_error(self, error: BaseException) -> BaseException:
        """Run every ``on_response_error`` hook over a transport failure.

        The result is the error the caller will see. A hook cannot turn the
        failure into a success: a non-exception result is rejected.
        """
        result = self._fold("on_response_error", error)
        if not isinstance(result, BaseException):
            raise TypeError(
                f"on_response_error must return an exception, got {type(result).__name__}"
            )
        return result


class HeaderInterceptor(HttpInterceptor):
    """Append fixed headers to every request."""

    def __init__(self, headers: Mapping[str, str]):
        self.headers = dict(headers)

    def on_request(self, request: "RequestDescriptor") -> "RequestDescriptor":
        for key, value in self.headers.items():
            request.add_header(key, value)
        return request


class BearerTokenInterceptor(HeaderInterceptor):
    """Inject an ``Authorization: Bearer`` header.

    Replaces any Authorization header already present on the request.
    """

    def __init__(self, token: str):
        super().__init__({"Authorization": f"Bearer {token}"})

    def on_request(self, request: "RequestDescriptor") -> "RequestDescriptor":
        request.headers["Authorization"] = self.headers["Authorization"]
        return request


class LoggingInterceptor(HttpInterceptor):
    """Log each request, response and failure."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger("declarest")
        self.level = level

    def on_request(self, request: "RequestDescriptor") -> "RequestDescriptor":
        self.logger.log(self.level, f"--> {request.method} {request.url}")
        return request

    def on_response(self, response: httpx.Response) -> httpx.Response:
        self.logger.log(self.level, f"<-- {response.status_code} {response.reason_phrase}")
        return response

    def on_response_error(self, error: BaseException) -> BaseException:
        self.logger.warning(f"<-- request failed: {error}")
        return error
