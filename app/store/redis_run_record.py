"""Redis-backed run record store with per-entry expiry."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

import redis

from app.domain import RunRecord

from .interfaces import RunRecordStoreError, RunRecordStorePort

logger = logging.getLogger(__name__)


class RedisRunRecordStore(RunRecordStorePort):
    """Run record store keeping one JSON string per job key.

    Entries live under `<key_prefix>:<environment_name>:<job key>` and carry a
    Redis TTL, so expiry needs no background sweeper.
    """

    def __init__(self, client: redis.Redis, environment_name: str, key_prefix: str = "jobdash:running"):
        """Initialize Redis run record store.

        Args:
            client: Redis client with decoded responses.
            environment_name: Runtime environment label scoping every key.
            key_prefix: Key prefix for run record entries.

        Returns:
            None: This initializer does not return a value.

        Raises:
            ValueError: Raised when client is None or labels are blank.
        """

        if client is None:
            raise ValueError("client must not be None")
        if not environment_name.strip():
            raise ValueError("environment_name must not be blank")
        if not key_prefix.strip():
            raise ValueError("key_prefix must not be blank")

        self._client = client
        self._environment_name = environment_name.strip()
        self._key_prefix = key_prefix.strip().rstrip(":")

    def store_key(self, key: str) -> str:
        """Build the Redis key for one job key.

        Args:
            key: Job key.

        Returns:
            str: Fully qualified Redis key.

        Raises:
            ValueError: Raised when key is blank.
        """

        normalized_key = key.strip()
        if not normalized_key:
            raise ValueError("key must not be blank")
        return f"{self._key_prefix}:{self._environment_name}:{normalized_key}"

    def store_get(self, key: str) -> RunRecord | None:
        """Return the live run record for one job key.

        Args:
            key: Job key.

        Returns:
            RunRecord | None: Live record, or None when absent or unreadable.

        Raises:
            RunRecordStoreError: Raised when Redis cannot be reached.
        """

        redis_key = self.store_key(key)
        try:
            raw_value = self._client.get(redis_key)
        except redis.RedisError as error:
            raise RunRecordStoreError(f"run record read failed for key={key}") from error

        if raw_value is None:
            return None
        return _store_decode_run_record(key=key.strip(), raw_value=raw_value)

    def store_set(self, record: RunRecord, ttl_seconds: int) -> None:
        """Write one run record with `SET ... EX`, replacing any prior value.

        Args:
            record: Run record to persist.
            ttl_seconds: Entry lifetime in seconds.

        Returns:
            None: This method does not return a value.

        Raises:
            RunRecordStoreError: Raised when the write fails.
            ValueError: Raised when ttl_seconds is not positive.
        """

        _store_validate_ttl(ttl_seconds)
        payload = {
            "runtime_id": record.runtime_id,
            "queue": record.queue,
            "started_at": int(record.started_at.timestamp()),
        }
        try:
            self._client.set(self.store_key(record.key), json.dumps(payload), ex=ttl_seconds)
        except redis.RedisError as error:
            raise RunRecordStoreError(f"run record write failed for key={record.key}") from error

    def store_expire(self, key: str, ttl_seconds: int) -> bool:
        """Reset remaining lifetime of one live run record with `EXPIRE`.

        Args:
            key: Job key.
            ttl_seconds: New entry lifetime in seconds.

        Returns:
            bool: True when a live record was updated.

        Raises:
            RunRecordStoreError: Raised when the update fails.
            ValueError: Raised when ttl_seconds is not positive.
        """

        _store_validate_ttl(ttl_seconds)
        try:
            return bool(self._client.expire(self.store_key(key), ttl_seconds))
        except redis.RedisError as error:
            raise RunRecordStoreError(f"run record expire failed for key={key}") from error

    def store_delete(self, key: str) -> bool:
        """Delete one run record with `DEL`.

        Args:
            key: Job key.

        Returns:
            bool: True when a record was removed.

        Raises:
            RunRecordStoreError: Raised when the delete fails.
        """

        try:
            return bool(self._client.delete(self.store_key(key)))
        except redis.RedisError as error:
            raise RunRecordStoreError(f"run record delete failed for key={key}") from error

    def store_ttl(self, key: str) -> int | None:
        """Return remaining lifetime of one run record with `TTL`.

        Args:
            key: Job key.

        Returns:
            int | None: Remaining seconds or None when absent or persistent.

        Raises:
            RunRecordStoreError: Raised when the read fails.
        """

        try:
            remaining_seconds = int(self._client.ttl(self.store_key(key)))
        except redis.RedisError as error:
            raise RunRecordStoreError(f"run record ttl read failed for key={key}") from error
        if remaining_seconds < 0:
            return None
        return remaining_seconds


def _store_validate_ttl(ttl_seconds: int) -> None:
    if ttl_seconds <= 0:
        raise ValueError("ttl_seconds must be > 0")


def _store_decode_run_record(key: str, raw_value: str) -> RunRecord | None:
    """Decode one stored JSON value into a run record.

    Args:
        key: Job key the value belongs to.
        raw_value: Stored JSON text.

    Returns:
        RunRecord | None: Decoded record or None when the value carries no runtime id.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    try:
        payload = json.loads(raw_value)
    except ValueError:
        logger.warning("Ignoring unreadable run record for key=%s", key)
        return None
    if not isinstance(payload, dict):
        logger.warning("Ignoring non-object run record for key=%s", key)
        return None

    runtime_id = str(payload.get("runtime_id") or "").strip()
    if not runtime_id:
        return None

    started_at_value = payload.get("started_at")
    try:
        started_at = datetime.fromtimestamp(float(started_at_value), tz=timezone.utc)
    except (TypeError, ValueError):
        started_at = datetime.fromtimestamp(0, tz=timezone.utc)

    return RunRecord(
        key=key,
        runtime_id=runtime_id,
        queue=str(payload.get("queue") or "").strip(),
        started_at=started_at,
    )
