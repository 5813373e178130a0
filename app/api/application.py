"""FastAPI application factory for the job dashboard service.

This module defines API application composition used by the runtime.
"""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.catalog import JobCatalogPort
from app.config import AppSettings
from app.dashboard import DASHBOARD_STATIC_DIR
from app.jobs import JobLauncherPort, JobStatusServicePort
from app.store import StoreHealthPort

from .routers import api_create_dashboard_router, api_create_health_router, api_create_jobs_router


def create_api_application(
    settings: AppSettings,
    store_health_service: StoreHealthPort,
    catalog: JobCatalogPort,
    launcher: JobLauncherPort,
    status_service: JobStatusServicePort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        store_health_service: Store health service used by health endpoints.
        catalog: Job catalog used by listing and dashboard endpoints.
        launcher: Job launcher used by the run endpoint.
        status_service: Status service used by the status map endpoint.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        RuntimeError: Raised if application initialization fails.
    """
    application = FastAPI(title="Job Dashboard")

    @application.get("/info", tags=["foundation"])
    def foundation_info() -> dict[str, str]:
        """Return minimal runtime metadata for bootstrap verification.

        Returns:
            dict[str, str]: Service name, status and environment label.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": "job-dashboard",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.mount("/static", StaticFiles(directory=str(DASHBOARD_STATIC_DIR)), name="static")
    application.include_router(api_create_health_router(store_health_service=store_health_service))
    application.include_router(
        api_create_jobs_router(
            catalog=catalog,
            launcher=launcher,
            status_service=status_service,
        )
    )
    application.include_router(
        api_create_dashboard_router(
            catalog=catalog,
            poll_interval_seconds=settings.poll_interval_seconds,
        )
    )

    return application
