"""Jobs API router composition for launch, status and catalog endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from app.catalog import CatalogLoadError, JobCatalogPort
from app.jobs import (
    HANDLER_UNRESOLVED_CODE,
    UNKNOWN_JOB_CODE,
    JobLauncherPort,
    JobStatusServicePort,
    LaunchResult,
)

logger = logging.getLogger(__name__)

LAUNCH_SUCCESS_MESSAGE = "success: job started"


def api_create_jobs_router(
    catalog: JobCatalogPort,
    launcher: JobLauncherPort,
    status_service: JobStatusServicePort,
) -> APIRouter:
    """Create jobs router with launch, status map and catalog endpoints.

    Args:
        catalog: Job catalog used for the listing endpoint.
        launcher: Job launcher used by the run endpoint.
        status_service: Status service used by the status map endpoint.

    Returns:
        APIRouter: Router exposing jobs APIs.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if catalog is None:
        raise ValueError("catalog must not be None")
    if launcher is None:
        raise ValueError("launcher must not be None")
    if status_service is None:
        raise ValueError("status_service must not be None")

    router = APIRouter(prefix="/jobs", tags=["jobs"])

    @router.post("/run")
    def api_jobs_run(payload: dict[str, Any] | None = Body(default=None)) -> JSONResponse:
        """Launch one catalog job by key.

        Args:
            payload: JSON body `{"key": str}`.

        Returns:
            JSONResponse: Success payload with runtime id, or an error payload
            with 404, 422 or 500 status.

        Raises:
            RuntimeError: This handler reports failures as responses.
        """

        key = str((payload or {}).get("key") or "").strip()
        if not key:
            return JSONResponse(
                content={"status": "error: key must not be blank"},
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )

        launch_result = launcher.job_launch(key)
        if launch_result.launch_is_success():
            return JSONResponse(
                content={"status": LAUNCH_SUCCESS_MESSAGE, "runtime_id": launch_result.runtime_id},
                status_code=status.HTTP_200_OK,
            )
        return JSONResponse(
            content={"status": f"error: {launch_result.reason}"},
            status_code=api_launch_error_status_code(launch_result),
        )

    @router.get("/statuses")
    def api_jobs_statuses() -> JSONResponse:
        """Return the resolved status of every catalog job.

        Returns:
            JSONResponse: `{"statuses": {key: {state, runtime_id?}}}` payload, or 503
            when the catalog cannot be read.

        Raises:
            RuntimeError: This handler reports failures as responses.
        """

        try:
            statuses = status_service.status_get_all()
        except CatalogLoadError as error:
            logger.error("Status map unavailable: %s", error)
            return JSONResponse(
                content={"status": "error: job catalog unavailable"},
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        payload = {"statuses": {key: resolved.status_to_payload() for key, resolved in statuses.items()}}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("")
    def api_jobs_list() -> JSONResponse:
        """Return the job catalog listing.

        Returns:
            JSONResponse: Catalog items payload, or 503 when the catalog cannot be read.

        Raises:
            RuntimeError: This handler reports failures as responses.
        """

        try:
            definitions = catalog.catalog_list_jobs()
        except CatalogLoadError as error:
            logger.error("Job catalog unavailable: %s", error)
            return JSONResponse(
                content={"status": "error: job catalog unavailable"},
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        payload = {
            "items": [
                {
                    "key": definition.key,
                    "display_name": definition.display_name,
                    "queue": definition.queue,
                    "cron": definition.cron,
                    "description": definition.description,
                }
                for definition in definitions
            ],
            "source": catalog.catalog_source_name(),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_launch_error_status_code(launch_result: LaunchResult) -> int:
    """Map a failed launch result to its HTTP status code.

    Args:
        launch_result: Failed launch result.

    Returns:
        int: 404 for unknown jobs, 422 for unresolved handlers, otherwise 500.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if launch_result.error_code == UNKNOWN_JOB_CODE:
        return status.HTTP_404_NOT_FOUND
    if launch_result.error_code == HANDLER_UNRESOLVED_CODE:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_500_INTERNAL_SERVER_ERROR
