"""Typed interfaces for job catalog responsibilities."""

from typing import Protocol

from app.domain import JobDefinition


class CatalogLoadError(RuntimeError):
    """Raised when a catalog source cannot be read or parsed."""


class HandlerResolutionError(LookupError):
    """Raised when a handler reference cannot be resolved to a callable.

    Attributes:
        handler: Handler reference that failed to resolve.
    """

    def __init__(self, message: str, handler: str):
        super().__init__(message)
        self.handler = handler


class JobCatalogPort(Protocol):
    """Port definition for the source of triggerable job definitions."""

    def catalog_source_name(self) -> str:
        """Return catalog source identifier for diagnostics.

        Returns:
            str: Human-readable source identifier.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    def catalog_list_jobs(self) -> list[JobDefinition]:
        """Return every job definition in stable catalog order.

        Returns:
            list[JobDefinition]: Job definitions with unique keys.

        Raises:
            CatalogLoadError: Raised when the source cannot be read.
        """

    def catalog_get_job(self, key: str) -> JobDefinition | None:
        """Return one job definition by key.

        Args:
            key: Job key.

        Returns:
            JobDefinition | None: Matching definition or None when unknown.

        Raises:
            CatalogLoadError: Raised when the source cannot be read.
        """
