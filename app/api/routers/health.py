"""Health endpoint router reporting app liveness and run record store reachability."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.store import StoreHealthPort


def api_create_health_router(store_health_service: StoreHealthPort) -> APIRouter:
    """Create health-check router with a per-backend store section.

    Args:
        store_health_service: Store-layer health service interface.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when store_health_service is invalid.
    """

    if store_health_service is None:
        raise ValueError("store_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return app liveness plus the store backend, target and reachability.

        Launches and status reads both depend on the run record store, so an
        unreachable store degrades the whole service to 503.
        """

        store_section = {
            "backend": store_health_service.store_backend_name(),
            "target": store_health_service.store_connection_label(),
        }
        try:
            store_health = store_health_service.store_check_health()
        except ConnectionError as error:
            store_section.update(state="down", detail=str(error))
            return JSONResponse(
                content={"status": "degraded", "app": "up", "store": store_section},
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        store_section.update(state=store_health.status, detail=store_health.detail)
        return JSONResponse(content={"status": "ok", "app": "up", "store": store_section}, status_code=status.HTTP_200_OK)

    return router
