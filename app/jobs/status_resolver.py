"""Status resolver reconciling one run record against the engine's state sources.

The engine has no direct "completed" signal, so completion is inferred when
the runtime id is absent from every live collection. Collections may overlap
during engine-internal transitions, which is why they are probed in a fixed
priority order and the first match wins.
"""

from __future__ import annotations

import logging
from typing import Callable, Final

from app.adapters import JobStateSourceAdapter, SourceProbe
from app.domain import JobDefinition, JobState, ResolvedStatus
from app.store import RunRecordStorePort

logger = logging.getLogger(__name__)


class StatusResolver:
    """Compute one discrete lifecycle state per job key."""

    SOURCE_STATE_ORDER: Final[tuple[tuple[str, JobState], ...]] = (
        (JobStateSourceAdapter.SOURCE_ACTIVE, JobState.BUSY),
        (JobStateSourceAdapter.SOURCE_PENDING, JobState.ENQUEUED),
        (JobStateSourceAdapter.SOURCE_SCHEDULED, JobState.SCHEDULED),
        (JobStateSourceAdapter.SOURCE_RETRY, JobState.RETRY),
        (JobStateSourceAdapter.SOURCE_DEAD, JobState.DEAD),
    )

    def __init__(self, store: RunRecordStorePort, sources: JobStateSourceAdapter):
        """Initialize status resolver.

        Args:
            store: Run record store read for the key's latest runtime id.
            sources: State source facade over the job engine.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are None.
        """

        if store is None:
            raise ValueError("store must not be None")
        if sources is None:
            raise ValueError("sources must not be None")
        self._store = store
        self._sources = sources

    def status_resolve(self, definition: JobDefinition) -> ResolvedStatus:
        """Resolve the current state of one catalog job.

        Args:
            definition: Catalog job definition.

        Returns:
            ResolvedStatus: `idle` without a run record, otherwise the reconciled
            state with the record's runtime id.

        Raises:
            RunRecordStoreError: Raised when the run record cannot be read.
        """

        record = self._store.store_get(definition.key)
        if record is None:
            return ResolvedStatus(key=definition.key, state=JobState.IDLE)

        queue_name = record.queue or definition.queue
        state = self.status_resolve_runtime_id(runtime_id=record.runtime_id, queue=queue_name)
        return ResolvedStatus(key=definition.key, state=state, runtime_id=record.runtime_id, run_record=record)

    def status_resolve_runtime_id(self, runtime_id: str, queue: str | None) -> JobState:
        """Probe every source in priority order and reconcile one state.

        Args:
            runtime_id: Runtime id recorded at launch.
            queue: Queue used for the scoped pending probe.

        Returns:
            JobState: First matching source's state, `done` when no source
            matched cleanly, or `unknown` when no source matched and at least
            one probe failed.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        probes: dict[str, Callable[[], SourceProbe]] = {
            JobStateSourceAdapter.SOURCE_ACTIVE: lambda: self._sources.source_is_active(runtime_id),
            JobStateSourceAdapter.SOURCE_PENDING: lambda: self._sources.source_is_pending(runtime_id, queue),
            JobStateSourceAdapter.SOURCE_SCHEDULED: lambda: self._sources.source_is_scheduled(runtime_id),
            JobStateSourceAdapter.SOURCE_RETRY: lambda: self._sources.source_is_retrying(runtime_id),
            JobStateSourceAdapter.SOURCE_DEAD: lambda: self._sources.source_is_dead(runtime_id),
        }

        failed_sources: list[str] = []
        for source, matched_state in self.SOURCE_STATE_ORDER:
            probe = probes[source]()
            if probe.probe_is_found():
                return matched_state
            if probe.probe_is_error():
                failed_sources.append(source)

        if failed_sources:
            logger.warning(
                "Resolved runtime_id=%s as unknown; failed sources: %s",
                runtime_id,
                ", ".join(failed_sources),
            )
            return JobState.UNKNOWN
        return JobState.DONE
