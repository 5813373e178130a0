"""Static job catalog loaded from a per-environment YAML schedule file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

import yaml

from app.domain import JobDefinition

from .definitions import catalog_build_definition
from .interfaces import CatalogLoadError, JobCatalogPort

logger = logging.getLogger(__name__)


class YamlJobCatalog(JobCatalogPort):
    """Job catalog reading `<key>: {class, cron, queue, description, args}` entries.

    The file is re-read on every call so edits apply without a restart. A
    missing file is an empty catalog.
    """

    def __init__(self, path: str | Path, display_names: Mapping[str, str] | None = None):
        """Initialize YAML job catalog.

        Args:
            path: Schedule file path.
            display_names: Optional display name overrides keyed by job key.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when path is blank.
        """

        if not str(path).strip():
            raise ValueError("path must not be blank")
        self._path = Path(path)
        self._display_names = dict(display_names or {})

    def catalog_source_name(self) -> str:
        return f"yaml:{self._path}"

    def catalog_list_jobs(self) -> list[JobDefinition]:
        """Parse the schedule file into job definitions in file order.

        Returns:
            list[JobDefinition]: Job definitions; empty when the file does not exist.

        Raises:
            CatalogLoadError: Raised when the file cannot be read or is not a mapping.
        """

        if not self._path.exists():
            logger.warning("Job catalog file not found: %s", self._path)
            return []

        try:
            raw_catalog = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as error:
            raise CatalogLoadError(f"job catalog file could not be loaded: {self._path}") from error

        if raw_catalog is None:
            return []
        if not isinstance(raw_catalog, dict):
            raise CatalogLoadError(f"job catalog file must contain a mapping: {self._path}")

        definitions: list[JobDefinition] = []
        for raw_key, raw_entry in raw_catalog.items():
            if raw_key is None or not str(raw_key).strip():
                logger.warning("Skipping job catalog entry with blank key in %s", self._path)
                continue
            entry = raw_entry if isinstance(raw_entry, dict) else {}
            definitions.append(
                catalog_build_definition(
                    key=raw_key,
                    handler=entry.get("class"),
                    queue=entry.get("queue"),
                    args=entry.get("args"),
                    cron=entry.get("cron"),
                    description=entry.get("description"),
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
