"""Job layer package for launch and status reconciliation boundaries."""

from .cache_policy import RunRecordCachePolicy, status_cache_policy_apply
from .errors import (
	HANDLER_UNRESOLVED_CODE,
	SUBMISSION_FAILURE_CODE,
	UNKNOWN_JOB_CODE,
	HandlerUnresolvedError,
	JobLaunchError,
	SubmissionFailureError,
	UnknownJobError,
)
from .interfaces import JobLauncherPort, JobStatusServicePort, LaunchResult
from .launcher import JobLauncher
from .status_resolver import StatusResolver
from .status_service import JobStatusService

__all__ = [
	"HANDLER_UNRESOLVED_CODE",
	"SUBMISSION_FAILURE_CODE",
	"UNKNOWN_JOB_CODE",
	"HandlerUnresolvedError",
	"JobLaunchError",
	"JobLauncher",
	"JobLauncherPort",
	"JobStatusService",
	"JobStatusServicePort",
	"LaunchResult",
	"RunRecordCachePolicy",
	"StatusResolver",
	"SubmissionFailureError",
	"UnknownJobError",
	"status_cache_policy_apply",
]
