"""Regression tests for priority-ordered status reconciliation."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.adapters import SourceProbe
from app.domain import JobDefinition, JobState, RunRecord
from app.jobs import StatusResolver
from app.store import InMemoryRunRecordStore


class _SourcesStub:
    """State source stub returning configured outcomes and recording probe order."""

    def __init__(self, found: set[str] | None = None, failing: set[str] | None = None) -> None:
        self._found = found or set()
        self._failing = failing or set()
        self.calls: list[tuple[str, str, str | None]] = []

    def _probe(self, source: str, runtime_id: str, queue: str | None = None) -> SourceProbe:
        self.calls.append((source, runtime_id, queue))
        if source in self._failing:
            return SourceProbe.error(source, "ConnectionError: refused")
        if source in self._found:
            return SourceProbe.found(source)
        return SourceProbe.not_found(source)

    def source_is_active(self, runtime_id: str) -> SourceProbe:
        return self._probe("active", runtime_id)

    def source_is_pending(self, runtime_id: str, queue: str | None = None) -> SourceProbe:
        return self._probe("pending", runtime_id, queue)

    def source_is_scheduled(self, runtime_id: str) -> SourceProbe:
        return self._probe("scheduled", runtime_id)

    def source_is_retrying(self, runtime_id: str) -> SourceProbe:
        return self._probe("retry", runtime_id)

    def source_is_dead(self, runtime_id: str) -> SourceProbe:
        return self._probe("dead", runtime_id)


def _build_definition() -> JobDefinition:
    return JobDefinition(key="daily_report", display_name="Daily report", handler="json:dumps", queue="reports")


def _build_store(queue: str = "reports") -> InMemoryRunRecordStore:
    store = InMemoryRunRecordStore(clock=lambda: 0.0)
    store.store_set(
        RunRecord(
            key="daily_report",
            runtime_id="abc123",
            queue=queue,
            started_at=datetime(2026, 1, 5, tzinfo=timezone.utc),
        ),
        ttl_seconds=3600,
    )
    return store


def test_jobs_resolver_returns_idle_without_run_record() -> None:
    """Resolve idle without probing any source when nothing is tracked.

    Returns:
        None: Assertions validate idle resolution.

    Raises:
        AssertionError: Raised when sources are probed or state differs.
    """

    sources = _SourcesStub(found={"active"})
    resolver = StatusResolver(store=InMemoryRunRecordStore(), sources=sources)

    resolved = resolver.status_resolve(_build_definition())

    assert resolved.state is JobState.IDLE
    assert resolved.runtime_id is None
    assert resolved.status_to_payload() == {"state": "idle"}
    assert sources.calls == []


@pytest.mark.parametrize(
    ("found_sources", "expected_state"),
    [
        ({"active"}, JobState.BUSY),
        ({"pending"}, JobState.ENQUEUED),
        ({"scheduled"}, JobState.SCHEDULED),
        ({"retry"}, JobState.RETRY),
        ({"dead"}, JobState.DEAD),
        ({"active", "pending", "dead"}, JobState.BUSY),
        ({"retry", "dead"}, JobState.RETRY),
        (set(), JobState.DONE),
    ],
)
def test_jobs_resolver_first_matching_source_wins(found_sources: set[str], expected_state: JobState) -> None:
    """Map each source to its state and prefer earlier sources on overlap.

    Args:
        found_sources: Sources reporting the runtime id.
        expected_state: Expected resolved state.

    Returns:
        None: Assertions validate priority mapping.

    Raises:
        AssertionError: Raised when the resolved state differs.
    """

    resolver = StatusResolver(store=_build_store(), sources=_SourcesStub(found=found_sources))

    resolved = resolver.status_resolve(_build_definition())

    assert resolved.state is expected_state
    assert resolved.runtime_id == "abc123"
    assert resolved.run_record is not None


def test_jobs_resolver_stops_probing_after_first_match() -> None:
    """Skip lower-priority sources once a match is found."""

    sources = _SourcesStub(found={"pending"})
    resolver = StatusResolver(store=_build_store(), sources=sources)

    resolver.status_resolve(_build_definition())

    assert [call[0] for call in sources.calls] == ["active", "pending"]
    assert sources.calls[1] == ("pending", "abc123", "reports")


def test_jobs_resolver_reports_unknown_when_any_probe_fails_without_match() -> None:
    """Resolve unknown instead of done when completion cannot be confirmed.

    Returns:
        None: Assertions validate failure-aware completion inference.

    Raises:
        AssertionError: Raised when a failed probe is read as done.
    """

    resolver = StatusResolver(store=_build_store(), sources=_SourcesStub(failing={"scheduled"}))

    resolved = resolver.status_resolve(_build_definition())

    assert resolved.state is JobState.UNKNOWN
    assert resolved.status_to_payload() == {"state": "unknown", "runtime_id": "abc123"}


def test_jobs_resolver_later_match_wins_over_earlier_failure() -> None:
    """Trust a positive match even when a higher-priority source failed."""

    resolver = StatusResolver(store=_build_store(), sources=_SourcesStub(found={"dead"}, failing={"active"}))

    assert resolver.status_resolve(_build_definition()).state is JobState.DEAD


def test_jobs_resolver_falls_back_to_definition_queue_for_blank_record_queue() -> None:
    """Use the catalog queue for the scoped pending probe when the record has none."""

    sources = _SourcesStub()
    resolver = StatusResolver(store=_build_store(queue=""), sources=sources)

    resolver.status_resolve(_build_definition())

    assert ("pending", "abc123", "reports") in sources.calls
