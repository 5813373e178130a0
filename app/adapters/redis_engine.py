"""Redis job engine adapter for the Sidekiq-compatible storage layout."""

from __future__ import annotations

import json
import secrets
import time
from contextlib import contextmanager
from typing import Any, Callable, Final, Iterator, Sequence

import redis

from .engine_errors import (
    JobEngineConnectionError,
    JobEngineError,
    JobEngineMalformedEntryError,
    JobEngineSubmissionError,
    JobEngineTimeoutError,
)
from .interfaces import JobEnginePort


@contextmanager
def _engine_translate_errors(collection: str) -> Iterator[None]:
    """Translate redis-py exceptions into project-native engine exceptions.

    Args:
        collection: Engine collection label for diagnostics.

    Returns:
        Iterator[None]: Context manager body scope.

    Raises:
        JobEngineTimeoutError: Raised for socket timeouts.
        JobEngineConnectionError: Raised for connectivity failures.
        JobEngineError: Raised for any other Redis failure.
    """

    try:
        yield
    except redis.TimeoutError as error:
        raise JobEngineTimeoutError(f"{collection} read timed out", collection=collection) from error
    except redis.ConnectionError as error:
        raise JobEngineConnectionError(f"{collection} unreachable: {error}", collection=collection) from error
    except redis.RedisError as error:
        raise JobEngineError(f"{collection} command failed: {error}", collection=collection) from error


class RedisJobEngineAdapter(JobEnginePort):
    """Adapter reading and writing the engine's Redis collections.

    Layout: `queues` set plus `queue:<name>` lists for pending work, the
    `processes` set plus `<identity>:work` hashes for busy workers, and the
    `schedule`, `retry` and `dead` sorted sets. Every key may carry a
    namespace prefix.
    """

    _QUEUES_KEY: Final[str] = "queues"
    _PROCESSES_KEY: Final[str] = "processes"
    _SCHEDULED_KEY: Final[str] = "schedule"
    _RETRY_KEY: Final[str] = "retry"
    _DEAD_KEY: Final[str] = "dead"
    _QUEUE_PAGE_SIZE: Final[int] = 100

    def __init__(
        self,
        client: redis.Redis,
        namespace: str = "",
        clock: Callable[[], float] | None = None,
        runtime_id_factory: Callable[[], str] | None = None,
    ):
        """Initialize Redis job engine adapter.

        Args:
            client: Redis client with decoded responses.
            namespace: Optional key namespace prefix.
            clock: Optional wall clock returning epoch seconds.
            runtime_id_factory: Optional runtime id generator.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when client is None.
        """

        if client is None:
            raise ValueError("client must not be None")

        self._client = client
        self._namespace = namespace.strip().rstrip(":")
        self._clock = clock or time.time
        self._runtime_id_factory = runtime_id_factory or _engine_generate_runtime_id

    def engine_source_name(self) -> str:
        return "redis_job_engine"

    def engine_key(self, name: str) -> str:
        """Return one engine key with the configured namespace applied.

        Args:
            name: Unprefixed key name.

        Returns:
            str: Namespaced Redis key.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if not self._namespace:
            return name
        return f"{self._namespace}:{name}"

    def engine_submit(self, handler: str, args: Sequence[Any], queue: str) -> str:
        """Push one job payload onto its queue in a single MULTI/EXEC.

        Args:
            handler: Dotted handler path stored as the payload class.
            args: Positional handler arguments.
            queue: Target queue name.

        Returns:
            str: Generated runtime id (`jid`).

        Raises:
            ValueError: Raised when handler or queue is blank.
            JobEngineError: Raised when the write fails.
        """

        normalized_handler = handler.strip()
        normalized_queue = queue.strip()
        if not normalized_handler:
            raise ValueError("handler must not be blank")
        if not normalized_queue:
            raise ValueError("queue must not be blank")

        runtime_id = self._runtime_id_factory()
        submitted_at = float(self._clock())
        payload = {
            "class": normalized_handler,
            "args": list(args),
            "queue": normalized_queue,
            "jid": runtime_id,
            "retry": True,
            "created_at": submitted_at,
            "enqueued_at": submitted_at,
        }
        try:
            encoded_payload = json.dumps(payload)
        except (TypeError, ValueError) as error:
            raise JobEngineSubmissionError(f"job arguments are not JSON serializable: {error}", collection="queue") from error

        with _engine_translate_errors("queue"):
            with self._client.pipeline(transaction=True) as pipeline:
                pipeline.sadd(self.engine_key(self._QUEUES_KEY), normalized_queue)
                pipeline.lpush(self.engine_key(f"queue:{normalized_queue}"), encoded_payload)
                pipeline.execute()
        return runtime_id

    def engine_list_active(self) -> Iterator[dict[str, Any]]:
        """Yield decoded work entries for every busy worker thread.

        Returns:
            Iterator[dict[str, Any]]: Work entries; an embedded JSON `payload` string is decoded.

        Raises:
            JobEngineError: Raised when the registry cannot be read.
            JobEngineMalformedEntryError: Raised when one entry cannot be decoded.
        """

        with _engine_translate_errors("active"):
            identities = sorted(self._client.smembers(self.engine_key(self._PROCESSES_KEY)))
            for identity in identities:
                work_entries = self._client.hgetall(self.engine_key(f"{identity}:work"))
                for _thread_id, raw_entry in sorted(work_entries.items()):
                    entry = _engine_decode_entry(raw_entry, collection="active")
                    embedded_payload = entry.get("payload")
                    if isinstance(embedded_payload, str):
                        entry["payload"] = _engine_decode_entry(embedded_payload, collection="active")
                    yield entry

    def engine_list_queue_names(self) -> list[str]:
        with _engine_translate_errors("pending"):
            return sorted(self._client.smembers(self.engine_key(self._QUEUES_KEY)))

    def engine_list_pending(self, queue: str | None = None) -> Iterator[dict[str, Any]]:
        """Yield pending payloads from one queue or from every known queue.

        Args:
            queue: Optional queue name; None or blank scans every known queue.

        Returns:
            Iterator[dict[str, Any]]: Decoded pending payloads, oldest first per queue page.

        Raises:
            JobEngineError: Raised when a queue cannot be read.
            JobEngineMalformedEntryError: Raised when one entry cannot be decoded.
        """

        normalized_queue = (queue or "").strip()
        queue_names = [normalized_queue] if normalized_queue else self.engine_list_queue_names()
        for queue_name in queue_names:
            yield from self._engine_iterate_queue(queue_name)

    def engine_list_scheduled(self) -> Iterator[dict[str, Any]]:
        return self._engine_iterate_sorted_set(self._SCHEDULED_KEY, collection="scheduled")

    def engine_list_retrying(self) -> Iterator[dict[str, Any]]:
        return self._engine_iterate_sorted_set(self._RETRY_KEY, collection="retry")

    def engine_list_dead(self) -> Iterator[dict[str, Any]]:
        return self._engine_iterate_sorted_set(self._DEAD_KEY, collection="dead")

    def _engine_iterate_queue(self, queue_name: str) -> Iterator[dict[str, Any]]:
        queue_key = self.engine_key(f"queue:{queue_name}")
        start_index = 0
        with _engine_translate_errors("pending"):
            while True:
                page = self._client.lrange(queue_key, start_index, start_index + self._QUEUE_PAGE_SIZE - 1)
                for raw_entry in page:
                    yield _engine_decode_entry(raw_entry, collection="pending")
                if len(page) < self._QUEUE_PAGE_SIZE:
                    return
                start_index += self._QUEUE_PAGE_SIZE

    def _engine_iterate_sorted_set(self, name: str, collection: str) -> Iterator[dict[str, Any]]:
        with _engine_translate_errors(collection):
            for raw_entry, _score in self._client.zscan_iter(self.engine_key(name)):
                yield _engine_decode_entry(raw_entry, collection=collection)


def _engine_generate_runtime_id() -> str:
    return secrets.token_hex(12)


def _engine_decode_entry(raw_entry: str, collection: str) -> dict[str, Any]:
    """Decode one JSON collection entry.

    Args:
        raw_entry: Raw JSON text stored by the engine.
        collection: Engine collection label for diagnostics.

    Returns:
        dict[str, Any]: Decoded entry object.

    Raises:
        JobEngineMalformedEntryError: Raised when the entry is not a JSON object.
    """

    try:
        entry = json.loads(raw_entry)
    except (TypeError, ValueError) as error:
        raise JobEngineMalformedEntryError(f"{collection} entry is not valid JSON", collection=collection) from error
    if not isinstance(entry, dict):
        raise JobEngineMalformedEntryError(f"{collection} entry is not a JSON object", collection=collection)
    return entry
