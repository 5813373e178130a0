"""Domain models used across application layer boundaries."""

from .models import (
    IN_FLIGHT_JOB_STATES,
    HealthStatus,
    JobDefinition,
    JobState,
    ResolvedStatus,
    RunRecord,
)

__all__ = [
    "IN_FLIGHT_JOB_STATES",
    "HealthStatus",
    "JobDefinition",
    "JobState",
    "ResolvedStatus",
    "RunRecord",
]
