"""Typed interfaces for the run record store layer.

All Redis access for run record bookkeeping must remain in the store package
and its submodules.
"""

from typing import Protocol

from app.domain import HealthStatus, RunRecord


class RunRecordStoreError(RuntimeError):
    """Raised when the run record store cannot complete an operation."""


class RunRecordStorePort(Protocol):
    """Port definition for the per-key run record store with entry expiry.

    Every operation maps to one atomic store command, so callers never need
    in-process locking.
    """

    def store_get(self, key: str) -> RunRecord | None:
        """Return the live run record for one job key.

        Args:
            key: Job key.

        Returns:
            RunRecord | None: Live record or None when absent, expired or unreadable.

        Raises:
            RunRecordStoreError: Raised when the store cannot be reached.
        """

    def store_set(self, record: RunRecord, ttl_seconds: int) -> None:
        """Write one run record, replacing any prior record for the same key.

        Args:
            record: Run record to persist.
            ttl_seconds: Entry lifetime in seconds.

        Returns:
            None: This method does not return a value.

        Raises:
            RunRecordStoreError: Raised when the write fails.
            ValueError: Raised when ttl_seconds is not positive.
        """

    def store_expire(self, key: str, ttl_seconds: int) -> bool:
        """Reset the remaining lifetime of one live run record.

        Args:
            key: Job key.
            ttl_seconds: New entry lifetime in seconds.

        Returns:
            bool: True when a live record was updated.

        Raises:
            RunRecordStoreError: Raised when the update fails.
            ValueError: Raised when ttl_seconds is not positive.
        """

    def store_delete(self, key: str) -> bool:
        """Delete one run record.

        Args:
            key: Job key.

        Returns:
            bool: True when a record was removed.

        Raises:
            RunRecordStoreError: Raised when the delete fails.
        """

    def store_ttl(self, key: str) -> int | None:
        """Return remaining lifetime of one run record in whole seconds.

        Args:
            key: Job key.

        Returns:
            int | None: Remaining seconds or None when absent.

        Raises:
            RunRecordStoreError: Raised when the read fails.
        """


class StoreHealthPort(Protocol):
    """Port definition for store connectivity verification."""

    def store_backend_name(self) -> str:
        """Return the configured store backend name.

        Returns:
            str: Backend identifier such as `redis` or `memory`.
        """

    def store_connection_label(self) -> str:
        """Return a stable label for the active store connection target.

        Returns:
            str: Store target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def store_check_health(self) -> HealthStatus:
        """Check store connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Store health status payload.

        Raises:
            ConnectionError: Raised when the store cannot be reached.
        """
