"""JSON encoding helpers shared by body, query and path handling."""

import json
from typing import Any

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from .exceptions import SerializationError


def to_json(value: Any) -> str:
    """Encode a value as compact JSON.

    Raises:
        SerializationError: If the value is circular, not finite or not JSON
            encodable
    """
    try:
        if isinstance(value, BaseModel):
            return value.model_dump_json()
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, PydanticSerializationError) as e:
        raise SerializationError(f"Cannot encode value as JSON: {e}") from e


def stringify(value: Any) -> str:
    """Convert a scalar to its wire text.

    Booleans are lowercased so they read the same as in a JSON document.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_body(body: Any) -> str | None:
    """Encode a request body: strings pass through, anything else is JSON."""
    if body is None:
        return None
    if isinstance(body, str):
        return body
    return to_json(body)
