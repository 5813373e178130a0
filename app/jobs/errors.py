"""Project-native typed exceptions for job launch failures."""

from __future__ import annotations

from typing import Final

UNKNOWN_JOB_CODE: Final[str] = "UNKNOWN_JOB"
HANDLER_UNRESOLVED_CODE: Final[str] = "HANDLER_UNRESOLVED"
SUBMISSION_FAILURE_CODE: Final[str] = "SUBMISSION_FAILURE"


class JobLaunchError(Exception):
    """Base exception for launch failures.

    Attributes:
        key: Job key the launch was requested for.
        error_code: Deterministic failure code.
    """

    error_code: str = SUBMISSION_FAILURE_CODE

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key


class UnknownJobError(JobLaunchError, LookupError):
    """Requested job key has no entry in the job catalog."""

    error_code = UNKNOWN_JOB_CODE


class HandlerUnresolvedError(JobLaunchError):
    """Catalog handler reference could not be resolved to executable logic."""

    error_code = HANDLER_UNRESOLVED_CODE


class SubmissionFailureError(JobLaunchError, RuntimeError):
    """Job engine rejected or failed the submission, or its tracking could not be written."""

    error_code = SUBMISSION_FAILURE_CODE
