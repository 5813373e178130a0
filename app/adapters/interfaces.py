"""Typed interfaces for adapter-layer responsibilities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Protocol, Sequence


class SourceOutcome(str, Enum):
    """Tagged outcome of one state source probe."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class SourceProbe:
    """Result contract for one state source lookup.

    Attributes:
        source: Source label (`active`, `pending`, `scheduled`, `retry`, `dead`).
        outcome: Tagged lookup outcome.
        detail: Optional error detail when outcome is `error`.
    """

    source: str
    outcome: SourceOutcome
    detail: str | None = None

    @classmethod
    def found(cls, source: str) -> SourceProbe:
        return cls(source=source, outcome=SourceOutcome.FOUND)

    @classmethod
    def not_found(cls, source: str) -> SourceProbe:
        return cls(source=source, outcome=SourceOutcome.NOT_FOUND)

    @classmethod
    def error(cls, source: str, detail: str) -> SourceProbe:
        return cls(source=source, outcome=SourceOutcome.ERROR, detail=detail)

    def probe_is_found(self) -> bool:
        return self.outcome is SourceOutcome.FOUND

    def probe_is_error(self) -> bool:
        return self.outcome is SourceOutcome.ERROR


class JobEnginePort(Protocol):
    """Port definition for the external job execution engine.

    Collection readers yield decoded entries lazily; a failure may surface
    while iterating.
    """

    def engine_source_name(self) -> str:
        """Return engine source identifier for diagnostics.

        Returns:
            str: Human-readable engine identifier.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    def engine_submit(self, handler: str, args: Sequence[Any], queue: str) -> str:
        """Submit one job and return its runtime id.

        Args:
            handler: Dotted handler path stored in the job payload.
            args: Positional handler arguments.
            queue: Target queue name.

        Returns:
            str: Engine-assigned runtime id.

        Raises:
            JobEngineError: Raised when submission fails.
        """

    def engine_list_active(self) -> Iterator[dict[str, Any]]:
        """Yield work entries reported by currently executing workers.

        Returns:
            Iterator[dict[str, Any]]: Decoded work entries.

        Raises:
            JobEngineError: Raised when the registry cannot be read or decoded.
        """

    def engine_list_queue_names(self) -> list[str]:
        """Return known queue names.

        Returns:
            list[str]: Sorted queue names.

        Raises:
            JobEngineError: Raised when the queue registry cannot be read.
        """

    def engine_list_pending(self, queue: str | None = None) -> Iterator[dict[str, Any]]:
        """Yield pending job payloads from one queue or from every known queue.

        Args:
            queue: Optional queue name; None scans all queues.

        Returns:
            Iterator[dict[str, Any]]: Decoded job payloads.

        Raises:
            JobEngineError: Raised when a queue cannot be read or decoded.
        """

    def engine_list_scheduled(self) -> Iterator[dict[str, Any]]:
        """Yield job payloads from the scheduled set."""

    def engine_list_retrying(self) -> Iterator[dict[str, Any]]:
        """Yield job payloads from the retry set."""

    def engine_list_dead(self) -> Iterator[dict[str, Any]]:
        """Yield job payloads from the dead set."""
