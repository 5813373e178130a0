"""Typed interfaces for job-layer launch and status responsibilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from app.domain import ResolvedStatus


@dataclass(frozen=True)
class LaunchResult:
    """Result contract for one launch request.

    Attributes:
        key: Requested job key.
        status: `success` or `error`.
        runtime_id: Engine runtime id on success.
        reason: Human-readable failure reason on error.
        error_code: Deterministic failure code on error.
    """

    key: str
    status: str
    runtime_id: str | None = None
    reason: str | None = None
    error_code: str | None = None

    @classmethod
    def success(cls, key: str, runtime_id: str) -> LaunchResult:
        return cls(key=key, status="success", runtime_id=runtime_id)

    @classmethod
    def error(cls, key: str, reason: str, error_code: str) -> LaunchResult:
        return cls(key=key, status="error", reason=reason, error_code=error_code)

    def launch_is_success(self) -> bool:
        return self.status == "success"


class JobLauncherPort(Protocol):
    """Port definition for launching catalog jobs on the job engine."""

    def job_launch(self, key: str) -> LaunchResult:
        """Submit one catalog job and record its runtime id.

        Args:
            key: Job key.

        Returns:
            LaunchResult: Success with runtime id, or error with reason and code.

        Raises:
            RuntimeError: Implementations report failures in the result instead of raising.
        """


class JobStatusServicePort(Protocol):
    """Port definition for resolving the status of every catalog job."""

    def status_get_all(self) -> dict[str, ResolvedStatus]:
        """Resolve one status per catalog key.

        Returns:
            dict[str, ResolvedStatus]: Statuses keyed by job key in catalog order.

        Raises:
            CatalogLoadError: Raised when the catalog itself cannot be read.
        """
