"""Dynamic lookup of handler references declared in the job catalog."""

from __future__ import annotations

import importlib
from typing import Any, Callable

from .interfaces import HandlerResolutionError


def catalog_resolve_handler(handler: str) -> Callable[..., Any]:
    """Resolve a handler reference to the callable it names.

    Supported forms are `package.module:attribute.path` and
    `package.module.attribute`.

    Args:
        handler: Handler reference from the catalog.

    Returns:
        Callable[..., Any]: Resolved callable.

    Raises:
        HandlerResolutionError: Raised when the reference is blank, cannot be
            imported, or does not name a callable.
    """

    normalized_handler = (handler or "").strip()
    if not normalized_handler:
        raise HandlerResolutionError("handler reference is blank", handler=normalized_handler)

    if ":" in normalized_handler:
        module_path, _, attribute_path = normalized_handler.partition(":")
    else:
        module_path, _, attribute_path = normalized_handler.rpartition(".")
    if not module_path or not attribute_path:
        raise HandlerResolutionError(f"handler reference is not importable: {normalized_handler}", handler=normalized_handler)

    try:
        resolved_value: Any = importlib.import_module(module_path)
    except Exception as error:  # pylint: disable=broad-exception-caught
        raise HandlerResolutionError(
            f"handler module could not be imported: {module_path}",
            handler=normalized_handler,
        ) from error

    for attribute_name in attribute_path.split("."):
        try:
            resolved_value = getattr(resolved_value, attribute_name)
        except AttributeError as error:
            raise HandlerResolutionError(
                f"handler attribute not defined: {normalized_handler}",
                handler=normalized_handler,
            ) from error

    if not callable(resolved_value):
        raise HandlerResolutionError(f"handler is not callable: {normalized_handler}", handler=normalized_handler)
    return resolved_value
