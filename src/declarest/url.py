"""URL template resolution."""

import re
from typing import Any, Sequence

from .bindings import ParameterBinding
from .exceptions import BindingError
from .serialization import stringify

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def placeholders(template: str) -> list[str]:
    """Placeholder names of a template, in order of appearance."""
    return _PLACEHOLDER.findall(template)


def bound_argument(binding: ParameterBinding, args: Sequence[Any]) -> Any:
    """Argument a binding points at.

    Raises:
        BindingError: If the call did not supply that argument
    """
    if binding.argument_index >= len(args):
        label = binding.key or binding.role.value
        raise BindingError(
            f"Missing argument {binding.argument_index} for {binding.role.value} "
            f"parameter '{label}' ({len(args)} given)"
        )
    return args[binding.argument_index]


def resolve_path(template: str | None, path_bindings: Sequence[ParameterBinding], args: Sequence[Any]) -> str:
    """Substitute every ``{key}`` of a path template.

    Args:
        template: Path template such as ``/{id}/items``; None means no path
        path_bindings: PATH bindings of the method
        args: Positional call arguments

    Returns:
        The template with all placeholders replaced

    Raises:
        BindingError: If a placeholder has no binding or its argument is
            missing or None
    """
    if not template:
        return ""

    keys = {binding.key for binding in path_bindings}
    unresolved = [name for name in placeholders(template) if name not in keys]
    if unresolved:
        raise BindingError(
            f"Unresolved placeholder(s) {', '.join('{' + n + '}' for n in unresolved)} "
            f"in '{template}'"
        )

    resolved = template
    for binding in path_bindings:
        value = bound_argument(binding, args)
        if value is None:
            raise BindingError(f"Path parameter '{binding.key}' is None")
        resolved = resolved.replace("{" + binding.key + "}", stringify(value))
    return resolved


def resolve_url(
    base_url: str,
    path: str,
    url_binding: ParameterBinding | None,
    args: Sequence[Any],
) -> str:
    """Prefix a resolved path with the URL override or the base URL."""
    if url_binding is None:
        return (base_url or "") + path

    override = bound_argument(url_binding, args)
    if override is None:
        raise BindingError("URL parameter is None")
    return stringify(override) + path
