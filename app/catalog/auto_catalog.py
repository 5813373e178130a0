"""Catalog selection preferring the dynamic cron registry over the static file."""

from __future__ import annotations

from app.domain import JobDefinition

from .interfaces import JobCatalogPort


class AutoJobCatalog(JobCatalogPort):
    """Use the cron registry when it has entries, otherwise the static catalog."""

    def __init__(self, registry_catalog: JobCatalogPort, static_catalog: JobCatalogPort):
        """Initialize catalog selector.

        Args:
            registry_catalog: Dynamic catalog consulted first.
            static_catalog: Fallback catalog used when the registry is empty.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when either catalog is None.
        """

        if registry_catalog is None:
            raise ValueError("registry_catalog must not be None")
        if static_catalog is None:
            raise ValueError("static_catalog must not be None")
        self._registry_catalog = registry_catalog
        self._static_catalog = static_catalog

    def catalog_source_name(self) -> str:
        return (
            f"auto({self._registry_catalog.catalog_source_name()}, "
            f"{self._static_catalog.catalog_source_name()})"
        )

    def catalog_list_jobs(self) -> list[JobDefinition]:
        """Return registry definitions, or static definitions when the registry is empty.

        Returns:
            list[JobDefinition]: Definitions from the selected source.

        Raises:
            CatalogLoadError: Raised when the selected source cannot be read.
        """

        registry_definitions = self._registry_catalog.catalog_list_jobs()
        if registry_definitions:
            return registry_definitions
        return self._static_catalog.catalog_list_jobs()

    def catalog_get_job(self, key: str) -> JobDefinition | None:
        normalized_key = key.strip()
        for definition in self.catalog_list_jobs():
            if definition.key == normalized_key:
                return definition
        return None
