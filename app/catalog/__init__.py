"""Job catalog package for job definition sources and handler lookup."""

from .auto_catalog import AutoJobCatalog
from .cron_catalog import RedisCronJobCatalog
from .definitions import DEFAULT_QUEUE_NAME, catalog_build_definition, catalog_normalize_args
from .handlers import catalog_resolve_handler
from .interfaces import CatalogLoadError, HandlerResolutionError, JobCatalogPort
from .yaml_catalog import YamlJobCatalog

__all__ = [
	"AutoJobCatalog",
	"CatalogLoadError",
	"DEFAULT_QUEUE_NAME",
	"HandlerResolutionError",
	"JobCatalogPort",
	"RedisCronJobCatalog",
	"YamlJobCatalog",
	"catalog_build_definition",
	"catalog_normalize_args",
	"catalog_resolve_handler",
]
