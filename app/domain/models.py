"""Typed domain models shared across runtime layers.

This module provides the data contracts exchanged between the catalog, run
record store, state sources, resolver and API surfaces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class JobState(str, Enum):
    """Lifecycle state resolved for one job key."""

    IDLE = "idle"
    BUSY = "busy"
    ENQUEUED = "enqueued"
    SCHEDULED = "scheduled"
    RETRY = "retry"
    DEAD = "dead"
    DONE = "done"
    UNKNOWN = "unknown"

    def state_is_in_flight(self) -> bool:
        """Return whether the state is one of the transient in-flight states.

        Returns:
            bool: True for busy, enqueued, scheduled and retry.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self in IN_FLIGHT_JOB_STATES

    def state_is_terminal(self) -> bool:
        """Return whether no further transition is expected without a new launch.

        Returns:
            bool: True for done and dead.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self in (JobState.DONE, JobState.DEAD)


IN_FLIGHT_JOB_STATES = frozenset({JobState.BUSY, JobState.ENQUEUED, JobState.SCHEDULED, JobState.RETRY})


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


@dataclass(frozen=True)
class JobDefinition:
    """One triggerable unit of work supplied by the job catalog.

    Attributes:
        key: Stable logical job key.
        display_name: Human-readable name shown on the dashboard.
        handler: Dotted import path of the executable handler.
        queue: Queue name the job is submitted to.
        default_args: Ordered default handler arguments.
        cron: Optional cron expression from the schedule source.
        description: Optional free-text description from the schedule source.
    """

    key: str
    display_name: str
    handler: str
    queue: str
    default_args: tuple[object, ...] = field(default_factory=tuple)
    cron: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class RunRecord:
    """Short-lived association between a job key and its latest runtime id.

    Attributes:
        key: Job key the record tracks.
        runtime_id: Engine-assigned identifier of the submitted run.
        queue: Queue the run was submitted to.
        started_at: Submission timestamp in UTC.
    """

    key: str
    runtime_id: str
    queue: str
    started_at: datetime


@dataclass(frozen=True)
class ResolvedStatus:
    """Transient status computed for one job key.

    Attributes:
        key: Job key.
        state: Resolved lifecycle state.
        runtime_id: Runtime id the state was computed for, None when idle.
        run_record: Run record the state was computed from, when one existed.
    """

    key: str
    state: JobState
    runtime_id: str | None = None
    run_record: RunRecord | None = None

    def status_to_payload(self) -> dict[str, str]:
        """Serialize the status to the public status-map entry shape.

        Returns:
            dict[str, str]: `state` plus `runtime_id` when one is known.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        payload = {"state": self.state.value}
        if self.runtime_id:
            payload["runtime_id"] = self.runtime_id
        return payload
