"""Shared normalization helpers for building job definitions from raw catalog entries."""

from __future__ import annotations

import json
from typing import Any, Mapping

from app.domain import JobDefinition

DEFAULT_QUEUE_NAME = "default"


def catalog_normalize_args(raw_args: Any) -> tuple[object, ...]:
    """Normalize raw catalog arguments into an ordered tuple.

    Args:
        raw_args: None, a list, a JSON array string or a single scalar value.

    Returns:
        tuple[object, ...]: Ordered positional arguments.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if raw_args is None or raw_args == "":
        return ()
    if isinstance(raw_args, str):
        try:
            decoded_args = json.loads(raw_args)
        except ValueError:
            return (raw_args,)
        return catalog_normalize_args(decoded_args) if isinstance(decoded_args, list) else (decoded_args,)
    if isinstance(raw_args, (list, tuple)):
        return tuple(raw_args)
    return (raw_args,)


def catalog_build_definition(
    key: str,
    handler: Any,
    queue: Any = None,
    args: Any = None,
    cron: Any = None,
    description: Any = None,
    display_names: Mapping[str, str] | None = None,
) -> JobDefinition:
    """Build one job definition applying display-name and queue defaults.

    Display name precedence is the configured override, then the entry
    description, then the key itself.

    Args:
        key: Job key.
        handler: Raw handler reference; blank stays blank and fails at launch time.
        queue: Optional queue name.
        args: Raw default arguments.
        cron: Optional cron expression.
        description: Optional description.
        display_names: Optional display name overrides keyed by job key.

    Returns:
        JobDefinition: Normalized job definition.

    Raises:
        ValueError: Raised when key is blank.
    """

    normalized_key = str(key).strip()
    if not normalized_key:
        raise ValueError("key must not be blank")

    normalized_description = _catalog_optional_text(description)
    override_name = (display_names or {}).get(normalized_key)
    display_name = _catalog_optional_text(override_name) or normalized_description or normalized_key

    return JobDefinition(
        key=normalized_key,
        display_name=display_name,
        handler=_catalog_optional_text(handler) or "",
        queue=_catalog_optional_text(queue) or DEFAULT_QUEUE_NAME,
        default_args=catalog_normalize_args(args),
        cron=_catalog_optional_text(cron),
        description=normalized_description,
    )


def _catalog_optional_text(value: Any) -> str | None:
    if value is None:
        return None
    normalized_value = str(value).strip()
    return normalized_value or None
