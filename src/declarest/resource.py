"""Declarative resources.

A resource describes a remote collection: its base URL, default headers and
bound methods. Bound methods are declared with the verb builders, whose
fluent calls list the method's positional parameters in order::

    class UserResource(Resource):
        def get_base_url(self) -> str:
            return "https://api.example.com/users"

        search = GET("/search").query().header("X-Tenant")
        avatar = GET("/{id}/avatar").path("id").produces(MediaType.RAW)

    users = UserResource(http)
    found = await users.search({"name": "ada"}, "acme")

The bindings of every bound method are registered once, when the resource
class is created.
"""

import logging
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Mapping

from .bindings import SINGULAR_ROLES, MediaType, ParameterBindingRegistry, ParamRole
from .exceptions import BindingError
from .request import RequestDescriptor, RequestSynthesizer, ResourceDefinition

logger = logging.getLogger("declarest")


class Endpoint:
    """Declaration of one bound method.

    Built with the fluent methods below and locked once the owning class is
    created; it is shared, read-only, by every instance of that class.
    """

    def __init__(self, verb: str, template: str | None = None):
        self.verb = verb.upper()
        self.template = template
        self.static_headers: dict[str, str] = {}
        self.media_type = MediaType.JSON
        self.params: list[tuple[ParamRole, str]] = []
        self.name: str | None = None
        self._locked = False

    def __repr__(self) -> str:
        return f"<Endpoint {self.verb} {self.template or ''!r} name={self.name!r}>"

    def _check_open(self) -> None:
        if self._locked:
            raise BindingError(f"Endpoint '{self.name}' is already bound to a resource class")

    def _add(self, role: ParamRole, key: str = "") -> "Endpoint":
        self._check_open()
        if role in SINGULAR_ROLES and any(r is role for r, _ in self.params):
            raise BindingError(f"Only one {role.value} parameter is allowed per method")
        self.params.append((role, key))
        return self

    def url(self) -> "Endpoint":
        """Next parameter replaces the resource base URL."""
        return self._add(ParamRole.URL)

    def path(self, key: str) -> "Endpoint":
        """Next parameter fills the ``{key}`` placeholder of the template."""
        return self._add(ParamRole.PATH, key)

    def query(self, key: str = "") -> "Endpoint":
        """Next parameter is a mapping of query parameters.

        With a key, the parameter is a single value sent under that key.
        """
        return self._add(ParamRole.QUERY, key)

    def body(self) -> "Endpoint":
        """Next parameter is the request body."""
        return self._add(ParamRole.BODY)

    def header(self, key: str) -> "Endpoint":
        """Next parameter is the value of header ``key``."""
        return self._add(ParamRole.HEADER, key)

    def headers(self, headers: Mapping[str, str]) -> "Endpoint":
        """Static headers sent with every call of this method."""
        self._check_open()
        self.static_headers.update(headers)
        return self

    def produces(self, media_type: MediaType) -> "Endpoint":
        """Media type of the response (JSON by default)."""
        self._check_open()
        self.media_type = media_type
        return self

    def register(self, registry: ParameterBindingRegistry, method_name: str) -> None:
        """Record this endpoint's parameters under ``method_name``."""
        for index, (role, key) in enumerate(self.params):
            registry.register(method_name, role, key, index)

    def __set_name__(self, owner: type, name: str) -> None:
        if self.name is None:
            self.name = name
        self._locked = True

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        if self.name is None:
            raise BindingError(f"{self!r} was not declared in a resource class body")

        # The same endpoint may be bound under another name in this class
        name = getattr(type(instance), "_endpoint_names", {}).get(self, self.name)
        endpoint = self

        async def call(*args: Any) -> Any:
            return await instance._synthesizer.call(name, endpoint, args)

        call.__name__ = name
        call.__qualname__ = f"{type(instance).__name__}.{name}"
        return call


def GET(template: str | None = None) -> Endpoint:
    """Declare a GET method."""
    return Endpoint("GET", template)


def POST(template: str | None = None) -> Endpoint:
    """Declare a POST method."""
    return Endpoint("POST", template)


def PUT(template: str | None = None) -> Endpoint:
    """Declare a PUT method."""
    return Endpoint("PUT", template)


def PATCH(template: str | None = None) -> Endpoint:
    """Declare a PATCH method."""
    return Endpoint("PATCH", template)


def DELETE(template: str | None = None) -> Endpoint:
    """Declare a DELETE method."""
    return Endpoint("DELETE", template)


def HEAD(template: str | None = None) -> Endpoint:
    """Declare a HEAD method."""
    return Endpoint("HEAD", template)


def collect_endpoints(cls: type) -> dict[str, Endpoint]:
    """Endpoints visible on a class, honoring overrides along the MRO.

    A subclass attribute of the same name, endpoint or not, hides the
    inherited endpoint.
    """
    endpoints: dict[str, Endpoint] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, Endpoint):
                endpoints[name] = attr
            elif name in endpoints:
                del endpoints[name]
    return endpoints


class Resource(ABC):
    """Base class of declarative resources.

    Subclasses must implement ``get_base_url`` and may override
    ``get_default_headers``. Both are resolved once per resource class, at
    first construction.

    Default bound methods:
        find_one(id)        GET  {base}/{id}
        save(body)          POST {base}
        update(id, body)    PUT  {base}/{id}
        delete(id)          DELETE {base}/{id}
        find(query=None)    GET  {base}?{query}

    Usage:
        users = UserResource(http)
        user = await users.find_one(42)
        page = await users.find({"active": True, "tags": ["a", "b"]})
    """

    _registry: ParameterBindingRegistry
    _endpoints: Mapping[str, Endpoint]
    _endpoint_names: Mapping[Endpoint, str]
    _definition: ResourceDefinition

    find_one = GET("/{id}").path("id")
    save = POST().body()
    update = PUT("/{id}").path("id").body()
    delete = DELETE("/{id}").path("id")
    find = GET().query()

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        endpoints = collect_endpoints(cls)
        registry = ParameterBindingRegistry()
        names: dict[Endpoint, str] = {}
        for name, endpoint in endpoints.items():
            endpoint.register(registry, name)
            names.setdefault(endpoint, name)
        cls._registry = registry
        cls._endpoints = MappingProxyType(endpoints)
        cls._endpoint_names = MappingProxyType(names)
        logger.debug(f"Registered {len(endpoints)} endpoint(s) for {cls.__name__}")

    def __init__(self, http: Any):
        """Initialize a resource.

        Args:
            http: HttpService (or anything with a compatible async
                ``request(descriptor)``) used to send requests
        """
        self.http = http
        self.definition = self._resolve_definition()
        self._synthesizer = RequestSynthesizer(self.definition, http)

    def _resolve_definition(self) -> ResourceDefinition:
        cls = type(self)
        definition = cls.__dict__.get("_definition")
        if definition is None:
            definition = ResourceDefinition(
                base_url=self.get_base_url() or "",
                default_headers=MappingProxyType(dict(self.get_default_headers() or {})),
                registry=cls._registry,
            )
            cls._definition = definition
        return definition

    @abstractmethod
    def get_base_url(self) -> str:
        """Base URL every bound method's path is appended to."""
        ...

    def get_default_headers(self) -> Mapping[str, str]:
        """Headers sent with every request of this resource."""
        return {}

    @classmethod
    def endpoints(cls) -> Mapping[str, Endpoint]:
        """Bound methods of this resource class, by name."""
        return cls._endpoints

    def build_request(self, method_name: str, *args: Any) -> RequestDescriptor:
        """Build the request a bound method would send, without sending it.

        Raises:
            AttributeError: If ``method_name`` is not a bound method
            BindingError: If arguments do not satisfy the bindings
        """
        endpoint = self._endpoints.get(method_name)
        if endpoint is None:
            raise AttributeError(f"{type(self).__name__} has no bound method '{method_name}'")
        return self._synthesizer.build(method_name, endpoint, args)

