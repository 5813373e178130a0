"""Adapter layer package for job engine integration boundaries."""

from .engine_errors import (
	JobEngineConnectionError,
	JobEngineError,
	JobEngineMalformedEntryError,
	JobEngineSubmissionError,
	JobEngineTimeoutError,
)
from .interfaces import JobEnginePort, SourceOutcome, SourceProbe
from .redis_engine import RedisJobEngineAdapter
from .state_sources import (
	ACTIVE_ENTRY_ID_FIELD_PATHS,
	PAYLOAD_ID_FIELD_PATHS,
	JobStateSourceAdapter,
	source_lookup_identifier,
)

__all__ = [
	"ACTIVE_ENTRY_ID_FIELD_PATHS",
	"JobEngineConnectionError",
	"JobEngineError",
	"JobEngineMalformedEntryError",
	"JobEnginePort",
	"JobEngineSubmissionError",
	"JobEngineTimeoutError",
	"JobStateSourceAdapter",
	"PAYLOAD_ID_FIELD_PATHS",
	"RedisJobEngineAdapter",
	"SourceOutcome",
	"SourceProbe",
	"source_lookup_identifier",
]
