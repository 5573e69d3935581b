"""Parameter bindings and the per-resource binding registry.

A binding ties one positional argument of a resource method to the role it
plays when the request is built: URL override, path substitution, query
parameters, body or a dynamic header.
"""

from dataclasses import dataclass
from enum import Enum

from .exceptions import BindingError


class ParamRole(Enum):
    """Role of a bound parameter."""

    URL = "url"
    PATH = "path"
    QUERY = "query"
    BODY = "body"
    HEADER = "header"


class MediaType(Enum):
    """Media type a method produces.

    JSON responses are decoded, RAW responses are returned untouched.
    """

    JSON = "json"
    RAW = "raw"


# Roles that may be bound at most once per method
SINGULAR_ROLES = frozenset({ParamRole.URL, ParamRole.BODY})

_EMPTY: tuple["ParameterBinding", ...] = ()


@dataclass(frozen=True)
class ParameterBinding:
    """One bound parameter: its role, key and positional index."""

    role: ParamRole
    key: str
    argument_index: int


class ParameterBindingRegistry:
    """Bindings of every method of a resource type, keyed by method and role.

    Filled once when the resource class is created and only read afterwards,
    so concurrent calls can share it without locking.
    """

    def __init__(self):
        self._bindings: dict[str, dict[ParamRole, tuple[ParameterBinding, ...]]] = {}

    def register(self, method_name: str, role: ParamRole, key: str, argument_index: int) -> ParameterBinding:
        """Record one binding.

        Args:
            method_name: Name of the resource method
            role: Role of the parameter
            key: Placeholder, header or query key (empty for URL and BODY)
            argument_index: Position of the argument in the call

        Returns:
            The registered binding

        Raises:
            BindingError: If the index is negative or a second URL/BODY
                binding is registered for the same method
        """
        if argument_index < 0:
            raise BindingError(f"{method_name}: negative argument index {argument_index}")

        by_role = self._bindings.setdefault(method_name, {})
        existing = by_role.get(role, _EMPTY)
        if role in SINGULAR_ROLES and existing:
            raise BindingError(
                f"{method_name}: only one {role.value} parameter is allowed"
            )

        binding = ParameterBinding(role=role, key=key, argument_index=argument_index)
        by_role[role] = existing + (binding,)
        return binding

    def get(self, method_name: str, role: ParamRole) -> tuple[ParameterBinding, ...]:
        """Bindings of one role for a method, in registration order."""
        by_role = self._bindings.get(method_name)
        if by_role is None:
            return _EMPTY
        return by_role.get(role, _EMPTY)

    def first(self, method_name: str, role: ParamRole) -> ParameterBinding | None:
        """The single URL/BODY binding of a method, if any."""
        bindings = self.get(method_name, role)
        return bindings[0] if bindings else None
