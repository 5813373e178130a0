"""Regression tests for run record store expiry and Redis serialization."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest
import redis

from app.domain import RunRecord
from app.store import InMemoryRunRecordStore, RedisRunRecordStore, RunRecordStoreError


class _FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class _RedisStringStub:
    """Minimal Redis string-command stub recording TTLs without expiring."""

    def __init__(self, fail: bool = False) -> None:
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self._fail = fail

    def _check(self) -> None:
        if self._fail:
            raise redis.ConnectionError("connection refused")

    def get(self, key: str) -> str | None:
        self._check()
        return self.values.get(key)

    def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self._check()
        self.values[key] = value
        if ex is not None:
            self.ttls[key] = ex
        return True

    def expire(self, key: str, seconds: int) -> bool:
        self._check()
        if key not in self.values:
            return False
        self.ttls[key] = seconds
        return True

    def delete(self, key: str) -> int:
        self._check()
        self.ttls.pop(key, None)
        return 1 if self.values.pop(key, None) is not None else 0

    def ttl(self, key: str) -> int:
        self._check()
        if key not in self.values:
            return -2
        return self.ttls.get(key, -1)


def _build_record(key: str = "daily_report", runtime_id: str = "abc123") -> RunRecord:
    return RunRecord(
        key=key,
        runtime_id=runtime_id,
        queue="reports",
        started_at=datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc),
    )


def test_store_memory_entry_expires_after_ttl() -> None:
    """Drop records once their lifetime elapses.

    Returns:
        None: Assertions validate expiry behavior.

    Raises:
        AssertionError: Raised when an expired record is still returned.
    """

    clock = _FakeClock()
    store = InMemoryRunRecordStore(clock=clock)
    store.store_set(_build_record(), ttl_seconds=60)

    clock.now += 59
    assert store.store_get("daily_report") == _build_record()
    assert store.store_ttl("daily_report") == 1

    clock.now += 1
    assert store.store_get("daily_report") is None
    assert store.store_ttl("daily_report") is None


def test_store_memory_expire_resets_lifetime_and_ignores_missing_keys() -> None:
    """Reset lifetime for live records and report False for absent ones.

    Returns:
        None: Assertions validate expire semantics.

    Raises:
        AssertionError: Raised when expire semantics are incorrect.
    """

    clock = _FakeClock()
    store = InMemoryRunRecordStore(clock=clock)
    store.store_set(_build_record(), ttl_seconds=3600)

    assert store.store_expire("daily_report", 60) is True
    assert store.store_ttl("daily_report") == 60
    assert store.store_expire("missing", 60) is False

    clock.now += 61
    assert store.store_expire("daily_report", 60) is False


def test_store_memory_set_overwrites_prior_record_for_same_key() -> None:
    """Replace tracking when the same key is launched again.

    Returns:
        None: Assertions validate overwrite behavior.

    Raises:
        AssertionError: Raised when the prior record survives.
    """

    store = InMemoryRunRecordStore(clock=_FakeClock())
    store.store_set(_build_record(runtime_id="first"), ttl_seconds=3600)
    store.store_set(_build_record(runtime_id="second"), ttl_seconds=3600)

    assert store.store_get("daily_report").runtime_id == "second"
    assert store.store_delete("daily_report") is True
    assert store.store_delete("daily_report") is False


def test_store_memory_rejects_non_positive_ttl() -> None:
    """Reject zero TTLs on write and expire."""

    store = InMemoryRunRecordStore(clock=_FakeClock())

    with pytest.raises(ValueError, match="ttl_seconds"):
        store.store_set(_build_record(), ttl_seconds=0)
    with pytest.raises(ValueError, match="ttl_seconds"):
        store.store_expire("daily_report", 0)


def test_store_redis_writes_scoped_key_and_json_payload() -> None:
    """Persist records as JSON under the environment-scoped key with `EX`.

    Returns:
        None: Assertions validate key format and payload.

    Raises:
        AssertionError: Raised when serialization differs.
    """

    client = _RedisStringStub()
    store = RedisRunRecordStore(client=client, environment_name="test")

    store.store_set(_build_record(), ttl_seconds=3600)

    redis_key = "jobdash:running:test:daily_report"
    assert json.loads(client.values[redis_key]) == {
        "runtime_id": "abc123",
        "queue": "reports",
        "started_at": int(datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc).timestamp()),
    }
    assert client.ttls[redis_key] == 3600
    assert store.store_get("daily_report") == _build_record()

    assert store.store_expire("daily_report", 60) is True
    assert store.store_ttl("daily_report") == 60


def test_store_redis_treats_unreadable_payload_as_absent() -> None:
    """Return None for malformed JSON or payloads without a runtime id.

    Returns:
        None: Assertions validate defensive decoding.

    Raises:
        AssertionError: Raised when malformed payloads decode to records.
    """

    client = _RedisStringStub()
    store = RedisRunRecordStore(client=client, environment_name="test")
    client.values["jobdash:running:test:broken"] = "{not json"
    client.values["jobdash:running:test:empty"] = json.dumps({"queue": "reports"})

    assert store.store_get("broken") is None
    assert store.store_get("empty") is None


def test_store_redis_wraps_connection_failures() -> None:
    """Translate Redis failures into RunRecordStoreError."""

    store = RedisRunRecordStore(client=_RedisStringStub(fail=True), environment_name="test")

    with pytest.raises(RunRecordStoreError, match="read failed"):
        store.store_get("daily_report")
    with pytest.raises(RunRecordStoreError, match="expire failed"):
        store.store_expire("daily_report", 60)
