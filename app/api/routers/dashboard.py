"""Dashboard page router rendering one card per catalog job."""

from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.catalog import CatalogLoadError, JobCatalogPort
from app.dashboard import DASHBOARD_TEMPLATES_DIR, STATE_LABELS, dashboard_present_state
from app.domain import JobState


def api_create_dashboard_router(
    catalog: JobCatalogPort,
    poll_interval_seconds: float = 5.0,
    title: str = "Job Dashboard",
) -> APIRouter:
    """Create dashboard router serving the HTML job list.

    Cards render as idle; the browser poller restores live states on load.

    Args:
        catalog: Job catalog enumerating cards.
        poll_interval_seconds: Poll interval handed to the browser poller.
        title: Page title.

    Returns:
        APIRouter: Router exposing `/`.

    Raises:
        ValueError: Raised when catalog is None or interval is not positive.
    """

    if catalog is None:
        raise ValueError("catalog must not be None")
    if poll_interval_seconds <= 0:
        raise ValueError("poll_interval_seconds must be > 0")

    templates = Jinja2Templates(directory=str(DASHBOARD_TEMPLATES_DIR))
    router = APIRouter(tags=["dashboard"])

    @router.get("/", response_class=HTMLResponse)
    def api_dashboard_show(request: Request) -> HTMLResponse:
        """Render the dashboard page.

        Args:
            request: Incoming request used for URL building.

        Returns:
            HTMLResponse: Rendered page, or 503 when the catalog cannot be read.

        Raises:
            RuntimeError: This handler reports failures as responses.
        """

        try:
            definitions = catalog.catalog_list_jobs()
        except CatalogLoadError:
            return HTMLResponse(
                content="<h1>Job catalog unavailable</h1>",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        idle_view = dashboard_present_state(JobState.IDLE)
        cards = [
            {
                "key": definition.key,
                "display_name": definition.display_name,
                "queue": definition.queue,
                "cron": definition.cron,
                "view": idle_view,
            }
            for definition in definitions
        ]
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "title": title,
                "cards": cards,
                "state_labels": STATE_LABELS,
                "poll_interval_ms": int(poll_interval_seconds * 1000),
                "static_url": str(request.url_for("static", path="dashboard.js")),
            },
        )

    return router
