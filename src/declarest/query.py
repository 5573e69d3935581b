"""Query string serialization.

Each QUERY binding points at a mapping of parameters. Values are expanded as
follows:

- None is dropped
- lists and tuples append one entry per element, so a key may repeat
- mappings and models are JSON encoded into a single entry
- scalars are set directly

Non-list values are *set*, not appended: when two bindings (or a binding and
an earlier list) write the same key, the last write replaces every earlier
entry for that key.
"""

from collections.abc import Mapping
from typing import Any, Sequence

import httpx
from pydantic import BaseModel

from .bindings import ParameterBinding
from .exceptions import BindingError
from .serialization import stringify, to_json


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_object(value: Any) -> bool:
    return isinstance(value, (Mapping, BaseModel)) or _is_sequence(value)


def _query_mapping(binding: ParameterBinding, value: Any) -> Mapping[str, Any] | None:
    """Normalize a bound argument to a key/value mapping, or None to skip it."""
    if value is None:
        return None
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return value or None
    if binding.key:
        # Named query parameter bound to a single value
        return {binding.key: value}
    if not value:
        return None
    raise BindingError(
        f"Query parameter at index {binding.argument_index} must be a mapping, "
        f"got {type(value).__name__}"
    )


def serialize_query(query_bindings: Sequence[ParameterBinding], args: Sequence[Any]) -> httpx.QueryParams:
    """Build the ordered query multimap for a call.

    Args:
        query_bindings: QUERY bindings of the method, in registration order
        args: Positional call arguments; missing trailing arguments are
            treated as omitted optional queries

    Returns:
        Query parameters, possibly empty

    Raises:
        BindingError: If an unkeyed binding receives a non-mapping value
        SerializationError: If an object value cannot be JSON encoded
    """
    params = httpx.QueryParams()
    for binding in query_bindings:
        if binding.argument_index >= len(args):
            continue
        search = _query_mapping(binding, args[binding.argument_index])
        if search is None:
            continue

        for key, value in search.items():
            if value is None:
                continue
            if _is_sequence(value):
                for item in value:
                    if item is None:
                        continue
                    params = params.add(key, to_json(item) if _is_object(item) else stringify(item))
            elif _is_object(value):
                params = params.set(key, to_json(value))
            else:
                params = params.set(key, stringify(value))
    return params
