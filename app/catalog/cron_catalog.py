"""Dynamic job catalog backed by the cron registry stored in Redis."""

from __future__ import annotations

import json
import logging
from typing import Any, Final, Mapping

import redis

from app.domain import JobDefinition

from .definitions import catalog_build_definition
from .interfaces import CatalogLoadError, JobCatalogPort

logger = logging.getLogger(__name__)


class RedisCronJobCatalog(JobCatalogPort):
    """Job catalog reading cron registry hashes.

    The registry is a `cron_jobs` set of `cron_job:<name>` keys; each hash
    holds `name`, `klass`, `cron`, `description`, `args` and either
    `queue_name` or a JSON `message` carrying `queue`.
    """

    _REGISTRY_KEY: Final[str] = "cron_jobs"

    def __init__(self, client: redis.Redis, namespace: str = "", display_names: Mapping[str, str] | None = None):
        """Initialize cron registry catalog.

        Args:
            client: Redis client with decoded responses.
            namespace: Optional key namespace prefix shared with the job engine.
            display_names: Optional display name overrides keyed by job key.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when client is None.
        """

        if client is None:
            raise ValueError("client must not be None")
        self._client = client
        self._namespace = namespace.strip().rstrip(":")
        self._display_names = dict(display_names or {})

    def catalog_source_name(self) -> str:
        return "redis_cron_registry"

    def catalog_list_jobs(self) -> list[JobDefinition]:
        """Read every registered cron job, ordered by job name.

        Returns:
            list[JobDefinition]: Job definitions from the registry.

        Raises:
            CatalogLoadError: Raised when the registry cannot be read.
        """

        try:
            entry_keys = sorted(self._client.smembers(self._catalog_key(self._REGISTRY_KEY)))
            raw_entries = [self._client.hgetall(self._catalog_key(entry_key)) for entry_key in entry_keys]
        except redis.RedisError as error:
            raise CatalogLoadError("cron registry could not be read") from error

        definitions: list[JobDefinition] = []
        for entry_key, raw_entry in zip(entry_keys, raw_entries):
            if not raw_entry:
                continue
            job_name = (raw_entry.get("name") or entry_key.split(":", 1)[-1]).strip()
            if not job_name:
                logger.warning("Skipping cron registry entry with blank name: %s", entry_key)
                continue
            definitions.append(
                catalog_build_definition(
                    key=job_name,
                    handler=raw_entry.get("klass"),
                    queue=_catalog_cron_queue_name(raw_entry),
                    args=raw_entry.get("args"),
                    cron=raw_entry.get("cron"),
                    description=raw_entry.get("description"),
                    display_names=self._display_names,
                )
            )
        return definitions

    def catalog_get_job(self, key: str) -> JobDefinition | None:
        normalized_key = key.strip()
        for definition in self.catalog_list_jobs():
            if definition.key == normalized_key:
                return definition
        return None

    def _catalog_key(self, name: str) -> str:
        if not self._namespace:
            return name
        return f"{self._namespace}:{name}"


def _catalog_cron_queue_name(raw_entry: dict[str, Any]) -> str | None:
    queue_name = (raw_entry.get("queue_name") or "").strip()
    if queue_name:
        return queue_name

    raw_message = raw_entry.get("message")
    if not raw_message:
        return None
    try:
        message = json.loads(raw_message)
    except ValueError:
        return None
    if isinstance(message, dict) and message.get("queue"):
        return str(message["queue"])
    return None
