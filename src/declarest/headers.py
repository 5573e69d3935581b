"""Header composition."""

from collections.abc import Mapping
from typing import Any, Sequence

import httpx

from .bindings import ParameterBinding
from .serialization import stringify

DEFAULT_CONTENT_TYPE = ("Content-Type", "application/json")


def compose_headers(
    default_headers: Mapping[str, str] | None,
    static_headers: Mapping[str, str] | None,
    header_bindings: Sequence[ParameterBinding],
    args: Sequence[Any],
) -> httpx.Headers:
    """Merge resource, method and parameter headers.

    Entries are appended in that order and never replace one another, so a
    key may appear several times. If nothing was declared anywhere, the
    result is a lone ``Content-Type: application/json``.

    Header arguments that were not supplied, or are None, are left out.
    """
    items: list[tuple[str, str]] = []
    for source in (default_headers, static_headers):
        if source:
            items.extend((key, stringify(value)) for key, value in source.items())

    for binding in header_bindings:
        if binding.argument_index >= len(args):
            continue
        value = args[binding.argument_index]
        if value is None:
            continue
        items.append((binding.key, stringify(value)))

    if not items:
        items.append(DEFAULT_CONTENT_TYPE)
    return httpx.Headers(items)
