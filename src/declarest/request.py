"""Request synthesis: from a bound method call to a decoded response.

The synthesizer turns the positional arguments of a resource method into a
``RequestDescriptor`` (body, URL, query, headers, in that order), sends it
through the HTTP service and decodes the response according to the method's
media type.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Sequence

import httpx

from .bindings import MediaType, ParameterBindingRegistry, ParamRole
from .headers import compose_headers
from .query import serialize_query
from .serialization import encode_body
from .url import bound_argument, resolve_path, resolve_url

if TYPE_CHECKING:
    from .client.service import HttpService
    from .resource import Endpoint

logger = logging.getLogger("declarest")


@dataclass
class RequestDescriptor:
    """A transport-ready request.

    Built fresh for every call. Interceptors may mutate it in ``on_request``;
    once handed to the transport it is no longer touched.

    ``extensions`` is free-form per-request state for interceptors. The keys
    httpx itself understands (``timeout``, ``trace``, ``sni_hostname``,
    ``target``) are forwarded to the httpx request; all others stay local.
    """

    method: str
    url: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    query: httpx.QueryParams = field(default_factory=httpx.QueryParams)
    body: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def add_header(self, key: str, value: str) -> None:
        """Append a header entry without replacing existing ones."""
        self.headers = httpx.Headers([*self.headers.multi_items(), (key, value)])

    def add_query(self, key: str, value: str) -> None:
        """Append a query entry."""
        self.query = self.query.add(key, value)


@dataclass(frozen=True)
class ResourceDefinition:
    """Class-level configuration of a resource, resolved once."""

    base_url: str
    default_headers: Mapping[str, str]
    registry: ParameterBindingRegistry


def decode_response(response: httpx.Response, media_type: MediaType) -> Any:
    """Decode a response body for the declared media type.

    JSON bodies that fail to parse are returned as the raw response.
    """
    if media_type is MediaType.RAW:
        return response
    try:
        return response.json()
    except ValueError:
        logger.debug(f"Response is not valid JSON ({response.status_code}), returning raw response")
        return response


class RequestSynthesizer:
    """Builds and sends requests for the bound methods of one resource.

    Usage:
        synthesizer = RequestSynthesizer(definition, http)
        request = synthesizer.build("find_one", endpoint, (42,))
        user = await synthesizer.send(request, MediaType.JSON)
    """

    def __init__(self, definition: ResourceDefinition, http: "HttpService"):
        self.definition = definition
        self.http = http

    def build(self, method_name: str, endpoint: "Endpoint", args: Sequence[Any]) -> RequestDescriptor:
        """Build the request for one call.

        Args:
            method_name: Name the endpoint is bound to on the resource
            endpoint: The endpoint declaration (verb, template, headers)
            args: Positional call arguments

        Returns:
            A new request descriptor

        Raises:
            BindingError: If arguments do not satisfy the bindings
            SerializationError: If the body or a query value is not JSON encodable
        """
        registry = self.definition.registry

        body = None
        body_binding = registry.first(method_name, ParamRole.BODY)
        if body_binding is not None:
            body = encode_body(bound_argument(body_binding, args))

        path = resolve_path(endpoint.template, registry.get(method_name, ParamRole.PATH), args)
        url = resolve_url(
            self.definition.base_url,
            path,
            registry.first(method_name, ParamRole.URL),
            args,
        )

        query = serialize_query(registry.get(method_name, ParamRole.QUERY), args)
        headers = compose_headers(
            self.definition.default_headers,
            endpoint.static_headers,
            registry.get(method_name, ParamRole.HEADER),
            args,
        )

        logger.debug(f"Built {endpoint.verb} {url} for {method_name}")
        return RequestDescriptor(
            method=endpoint.verb,
            url=url,
            headers=headers,
            query=query,
            body=body,
        )

    async def send(self, request: RequestDescriptor, media_type: MediaType = MediaType.JSON) -> Any:
        """Send a request through the HTTP service and decode the result."""
        response = await self.http.request(request)
        return decode_response(response, media_type)

    async def call(self, method_name: str, endpoint: "Endpoint", args: Sequence[Any]) -> Any:
        """Build, send and decode in one step."""
        request = self.build(method_name, endpoint, args)
        return await self.send(request, endpoint.media_type)
