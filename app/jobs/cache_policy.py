"""Run record lifetime policy applied after each status resolution."""

from __future__ import annotations

from dataclasses import dataclass

from app.domain import JobState, ResolvedStatus
from app.store import RunRecordStorePort


@dataclass(frozen=True)
class RunRecordCachePolicy:
    """Per-state run record lifetimes.

    In-flight runs keep being tracked up to a safety ceiling; terminal runs
    stay visible for a short window and then fall back to idle.

    Attributes:
        in_flight_ttl_seconds: Lifetime refreshed for busy, enqueued, scheduled and retry.
        done_ttl_seconds: Lifetime applied once a run is observed as done.
        dead_ttl_seconds: Lifetime applied once a run is observed as dead.
    """

    in_flight_ttl_seconds: int = 3600
    done_ttl_seconds: int = 60
    dead_ttl_seconds: int = 300

    def __post_init__(self) -> None:
        for field_name in ("in_flight_ttl_seconds", "done_ttl_seconds", "dead_ttl_seconds"):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"{field_name} must be > 0")

    def policy_ttl_for_state(self, state: JobState) -> int | None:
        """Return the lifetime to apply for one resolved state.

        Args:
            state: Resolved lifecycle state.

        Returns:
            int | None: TTL seconds, or None when the record must be left untouched.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if state.state_is_in_flight():
            return self.in_flight_ttl_seconds
        if state.state_is_terminal():
            return self.dead_ttl_seconds if state is JobState.DEAD else self.done_ttl_seconds
        return None


def status_cache_policy_apply(
    store: RunRecordStorePort,
    policy: RunRecordCachePolicy,
    resolved_status: ResolvedStatus,
) -> int | None:
    """Apply the lifetime policy to the run record behind one resolved status.

    Args:
        store: Run record store.
        policy: Lifetime policy.
        resolved_status: Status returned by the resolver.

    Returns:
        int | None: TTL applied, or None when the store was not touched.

    Raises:
        RunRecordStoreError: Raised when the expire command fails.
    """

    if resolved_status.run_record is None:
        return None
    ttl_seconds = policy.policy_ttl_for_state(resolved_status.state)
    if ttl_seconds is None:
        return None
    store.store_expire(resolved_status.key, ttl_seconds)
    return ttl_seconds
