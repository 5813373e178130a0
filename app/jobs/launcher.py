"""Job launcher submitting catalog jobs and recording their runtime ids."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from app.adapters import JobEnginePort
from app.catalog import HandlerResolutionError, JobCatalogPort, catalog_resolve_handler
from app.domain import JobDefinition, RunRecord
from app.store import RunRecordStorePort

from .errors import HandlerUnresolvedError, JobLaunchError, SubmissionFailureError, UnknownJobError
from .interfaces import JobLauncherPort, LaunchResult

logger = logging.getLogger(__name__)


class JobLauncher(JobLauncherPort):
    """Launch catalog jobs exactly once per call, never retrying.

    A successful submission always overwrites the key's run record, even when
    an earlier run is still tracked; the earlier run keeps executing in the
    engine but is no longer reported.
    """

    def __init__(
        self,
        catalog: JobCatalogPort,
        engine: JobEnginePort,
        store: RunRecordStorePort,
        launch_ttl_seconds: int = 3600,
        handler_resolver: Callable[[str], Callable[..., Any]] | None = None,
        now_provider: Callable[[], datetime] | None = None,
    ):
        """Initialize job launcher dependencies.

        Args:
            catalog: Job catalog used to resolve keys.
            engine: Job engine receiving submissions.
            store: Run record store receiving the launch record.
            launch_ttl_seconds: Lifetime of a freshly written run record.
            handler_resolver: Optional handler lookup; defaults to dotted-path import.
            now_provider: Optional UTC clock used for `started_at`.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or TTL are invalid.
        """

        if catalog is None:
            raise ValueError("catalog must not be None")
        if engine is None:
            raise ValueError("engine must not be None")
        if store is None:
            raise ValueError("store must not be None")
        if launch_ttl_seconds <= 0:
            raise ValueError("launch_ttl_seconds must be > 0")

        self._catalog = catalog
        self._engine = engine
        self._store = store
        self._launch_ttl_seconds = launch_ttl_seconds
        self._handler_resolver = handler_resolver or catalog_resolve_handler
        self._now_provider = now_provider or (lambda: datetime.now(timezone.utc))

    def job_launch(self, key: str) -> LaunchResult:
        """Launch one catalog job and report the outcome without raising.

        Args:
            key: Job key.

        Returns:
            LaunchResult: Success with runtime id, or error with reason and code.

        Raises:
            RuntimeError: This method reports failures in the result instead of raising.
        """

        normalized_key = (key or "").strip()
        try:
            record = self._job_launch_or_raise(normalized_key)
        except JobLaunchError as error:
            logger.warning("Launch failed for key=%s code=%s: %s", normalized_key, error.error_code, error)
            return LaunchResult.error(key=normalized_key, reason=str(error), error_code=error.error_code)
        except Exception as error:  # pylint: disable=broad-exception-caught
            logger.exception("Unexpected launch failure for key=%s", normalized_key)
            failure = SubmissionFailureError(f"unexpected launch failure: {error}", key=normalized_key)
            return LaunchResult.error(key=normalized_key, reason=str(failure), error_code=failure.error_code)

        logger.info(
            "Launched key=%s runtime_id=%s queue=%s engine=%s",
            record.key,
            record.runtime_id,
            record.queue,
            self._engine.engine_source_name(),
        )
        return LaunchResult.success(key=record.key, runtime_id=record.runtime_id)

    def _job_launch_or_raise(self, key: str) -> RunRecord:
        """Resolve, submit and record one launch.

        Args:
            key: Normalized job key.

        Returns:
            RunRecord: Record written for the launched run.

        Raises:
            UnknownJobError: Raised when the key is not in the catalog.
            HandlerUnresolvedError: Raised when the handler cannot be resolved.
            SubmissionFailureError: Raised when submission or tracking fails.
        """

        definition = self._job_find_definition(key)
        try:
            self._handler_resolver(definition.handler)
        except HandlerResolutionError as error:
            raise HandlerUnresolvedError(f"handler not defined: {definition.handler or '<blank>'} ({error})", key=key) from error

        try:
            runtime_id = self._engine.engine_submit(
                handler=definition.handler,
                args=definition.default_args,
                queue=definition.queue,
            )
        except Exception as error:  # pylint: disable=broad-exception-caught
            raise SubmissionFailureError(f"job submission failed: {error}", key=key) from error

        record = RunRecord(
            key=key,
            runtime_id=runtime_id,
            queue=definition.queue,
            started_at=self._now_provider(),
        )
        try:
            self._store.store_set(record, ttl_seconds=self._launch_ttl_seconds)
        except Exception as error:  # pylint: disable=broad-exception-caught
            raise SubmissionFailureError(
                f"job submitted as runtime_id={runtime_id} but run record write failed: {error}",
                key=key,
            ) from error
        return record

    def _job_find_definition(self, key: str) -> JobDefinition:
        if not key:
            raise UnknownJobError("job key must not be blank", key=key)
        try:
            definition = self._catalog.catalog_get_job(key)
        except Exception as error:  # pylint: disable=broad-exception-caught
            raise SubmissionFailureError(f"job catalog unavailable: {error}", key=key) from error
        if definition is None:
            raise UnknownJobError(f"job not found (key={key})", key=key)
        return definition
