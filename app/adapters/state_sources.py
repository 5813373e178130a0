"""Read-only state source facade over the job engine's five collections.

Each probe answers one question ("is this runtime id in collection X?") and
always returns a tagged `SourceProbe`; engine failures never escape.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Final, Iterable, Iterator

from .interfaces import JobEnginePort, SourceProbe

logger = logging.getLogger(__name__)

# Ordered identifier field paths; the first present value wins.
ACTIVE_ENTRY_ID_FIELD_PATHS: Final[tuple[tuple[str, ...], ...]] = (
    ("payload", "jid"),
    ("job", "jid"),
    ("jid",),
    ("payload", "runtime_id"),
    ("runtime_id",),
)
PAYLOAD_ID_FIELD_PATHS: Final[tuple[tuple[str, ...], ...]] = (
    ("jid",),
    ("runtime_id",),
)


def source_lookup_identifier(entry: dict[str, Any], field_paths: Iterable[tuple[str, ...]]) -> str | None:
    """Return the first identifier value present under the candidate field paths.

    Args:
        entry: Decoded engine entry.
        field_paths: Ordered candidate paths into nested objects.

    Returns:
        str | None: Identifier text or None when no candidate path is present.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    for field_path in field_paths:
        current_value: Any = entry
        for field_name in field_path:
            if not isinstance(current_value, dict) or field_name not in current_value:
                current_value = None
                break
            current_value = current_value[field_name]
        if current_value is None or current_value == "":
            continue
        return str(current_value)
    return None


class JobStateSourceAdapter:
    """Facade answering per-collection membership questions for one runtime id."""

    SOURCE_ACTIVE: Final[str] = "active"
    SOURCE_PENDING: Final[str] = "pending"
    SOURCE_SCHEDULED: Final[str] = "scheduled"
    SOURCE_RETRY: Final[str] = "retry"
    SOURCE_DEAD: Final[str] = "dead"

    def __init__(self, engine: JobEnginePort):
        """Initialize state source facade.

        Args:
            engine: Job engine port providing raw collection readers.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def source_is_active(self, runtime_id: str) -> SourceProbe:
        """Check whether any executing worker reports the runtime id.

        Args:
            runtime_id: Runtime id to look for.

        Returns:
            SourceProbe: Tagged lookup outcome.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return self._source_probe(
            source=self.SOURCE_ACTIVE,
            runtime_id=runtime_id,
            entries_provider=self._engine.engine_list_active,
            field_paths=ACTIVE_ENTRY_ID_FIELD_PATHS,
        )

    def source_is_pending(self, runtime_id: str, queue: str | None = None) -> SourceProbe:
        """Check the named queue first, then fall back to every known queue.

        Args:
            runtime_id: Runtime id to look for.
            queue: Optional queue recorded at launch time.

        Returns:
            SourceProbe: Tagged lookup outcome; an error in the scoped scan is
            kept only when the all-queue fallback also fails to find the id.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        normalized_queue = (queue or "").strip()
        scoped_probe: SourceProbe | None = None
        if normalized_queue:
            scoped_probe = self._source_probe(
                source=self.SOURCE_PENDING,
                runtime_id=runtime_id,
                entries_provider=lambda: self._engine.engine_list_pending(normalized_queue),
                field_paths=PAYLOAD_ID_FIELD_PATHS,
            )
            if scoped_probe.probe_is_found():
                return scoped_probe

        fallback_probe = self._source_probe(
            source=self.SOURCE_PENDING,
            runtime_id=runtime_id,
            entries_provider=lambda: self._engine.engine_list_pending(None),
            field_paths=PAYLOAD_ID_FIELD_PATHS,
        )
        if fallback_probe.probe_is_found():
            return fallback_probe
        if scoped_probe is not None and scoped_probe.probe_is_error():
            return scoped_probe
        return fallback_probe

    def source_is_scheduled(self, runtime_id: str) -> SourceProbe:
        return self._source_probe(
            source=self.SOURCE_SCHEDULED,
            runtime_id=runtime_id,
            entries_provider=self._engine.engine_list_scheduled,
            field_paths=PAYLOAD_ID_FIELD_PATHS,
        )

    def source_is_retrying(self, runtime_id: str) -> SourceProbe:
        return self._source_probe(
            source=self.SOURCE_RETRY,
            runtime_id=runtime_id,
            entries_provider=self._engine.engine_list_retrying,
            field_paths=PAYLOAD_ID_FIELD_PATHS,
        )

    def source_is_dead(self, runtime_id: str) -> SourceProbe:
        return self._source_probe(
            source=self.SOURCE_DEAD,
            runtime_id=runtime_id,
            entries_provider=self._engine.engine_list_dead,
            field_paths=PAYLOAD_ID_FIELD_PATHS,
        )

    def _source_probe(
        self,
        source: str,
        runtime_id: str,
        entries_provider: Callable[[], Iterator[dict[str, Any]]],
        field_paths: Iterable[tuple[str, ...]],
    ) -> SourceProbe:
        """Scan one collection and collapse any failure into an error probe.

        Args:
            source: Source label.
            runtime_id: Runtime id to look for.
            entries_provider: Callable returning the collection iterator.
            field_paths: Identifier field paths for entries of this collection.

        Returns:
            SourceProbe: Tagged lookup outcome.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        normalized_runtime_id = runtime_id.strip()
        if not normalized_runtime_id:
            return SourceProbe.not_found(source)

        candidate_paths = tuple(field_paths)
        try:
            for entry in entries_provider():
                if source_lookup_identifier(entry, candidate_paths) == normalized_runtime_id:
                    return SourceProbe.found(source)
        except Exception as error:  # pylint: disable=broad-exception-caught
            logger.warning("State source %s query failed for runtime_id=%s: %s", source, normalized_runtime_id, error)
            return SourceProbe.error(source, f"{type(error).__name__}: {error}")
        return SourceProbe.not_found(source)
