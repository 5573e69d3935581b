"""declarest - Declarative HTTP resources with an interceptor pipeline."""

from declarest.bindings import MediaType, ParameterBinding, ParameterBindingRegistry, ParamRole
from declarest.client import ClientConfig, HttpService, HTTPTransport, Transport, create_http_service
from declarest.exceptions import (
    BindingError,
    DeclarestError,
    SerializationError,
    TransportAuthError,
    TransportConnectionError,
    TransportError,
    TransportNotFoundError,
)
from declarest.interceptors import (
    BearerTokenInterceptor,
    HeaderInterceptor,
    HttpInterceptor,
    InterceptorPipeline,
    LoggingInterceptor,
)
from declarest.request import RequestDescriptor, RequestSynthesizer, ResourceDefinition
from declarest.resource import DELETE, GET, HEAD, PATCH, POST, PUT, Endpoint, Resource

try:
    from importlib.metadata import version
    __version__ = version("declarest")
except Exception:
    __version__ = "0.1.0"  # Fallback for development

__all__ = [
    "DELETE",
    "GET",
    "HEAD",
    "PATCH",
    "POST",
    "PUT",
    "BearerTokenInterceptor",
    "BindingError",
    "ClientConfig",
    "DeclarestError",
    "Endpoint",
    "HTTPTransport",
    "HeaderInterceptor",
    "HttpInterceptor",
    "HttpService",
    "InterceptorPipeline",
    "LoggingInterceptor",
    "MediaType",
    "ParamRole",
    "ParameterBinding",
    "ParameterBindingRegistry",
    "RequestDescriptor",
    "RequestSynthesizer",
    "Resource",
    "ResourceDefinition",
    "SerializationError",
    "Transport",
    "TransportAuthError",
    "TransportConnectionError",
    "TransportError",
    "TransportNotFoundError",
    "create_http_service",
    "__version__",
]
