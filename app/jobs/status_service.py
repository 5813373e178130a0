"""Status service resolving every catalog key with per-key failure isolation."""

from __future__ import annotations

import logging

from app.catalog import JobCatalogPort
from app.domain import JobState, ResolvedStatus
from app.store import RunRecordStorePort

from .cache_policy import RunRecordCachePolicy, status_cache_policy_apply
from .interfaces import JobStatusServicePort
from .status_resolver import StatusResolver

logger = logging.getLogger(__name__)


class JobStatusService(JobStatusServicePort):
    """Resolve statuses for the whole catalog and apply the run record lifetime policy."""

    def __init__(
        self,
        catalog: JobCatalogPort,
        resolver: StatusResolver,
        store: RunRecordStorePort,
        cache_policy: RunRecordCachePolicy | None = None,
    ):
        """Initialize status service dependencies.

        Args:
            catalog: Job catalog enumerating known keys.
            resolver: Per-key status resolver.
            store: Run record store receiving lifetime updates.
            cache_policy: Optional lifetime policy; defaults to 3600/60/300 seconds.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are None.
        """

        if catalog is None:
            raise ValueError("catalog must not be None")
        if resolver is None:
            raise ValueError("resolver must not be None")
        if store is None:
            raise ValueError("store must not be None")
        self._catalog = catalog
        self._resolver = resolver
        self._store = store
        self._cache_policy = cache_policy or RunRecordCachePolicy()

    def status_get_all(self) -> dict[str, ResolvedStatus]:
        """Resolve one status per catalog key.

        A failure for one key becomes an `unknown` entry for that key only.

        Returns:
            dict[str, ResolvedStatus]: Statuses keyed by job key in catalog order.

        Raises:
            CatalogLoadError: Raised when the catalog itself cannot be read.
        """

        statuses: dict[str, ResolvedStatus] = {}
        for definition in self._catalog.catalog_list_jobs():
            resolved_status: ResolvedStatus | None = None
            try:
                resolved_status = self._resolver.status_resolve(definition)
                status_cache_policy_apply(self._store, self._cache_policy, resolved_status)
            except Exception as error:  # pylint: disable=broad-exception-caught
                logger.warning("Status resolution failed for key=%s: %s", definition.key, error)
                resolved_status = ResolvedStatus(
                    key=definition.key,
                    state=JobState.UNKNOWN,
                    runtime_id=resolved_status.runtime_id if resolved_status is not None else None,
                )
            statuses[definition.key] = resolved_status
        return statuses
