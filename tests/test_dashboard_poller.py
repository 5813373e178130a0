"""Regression tests for dashboard card presentation and the HTTP status poller."""

from __future__ import annotations

import json

import httpx
import pytest

from app.dashboard import (
    CSS_CLASS_BAD,
    CSS_CLASS_NEUTRAL,
    CSS_CLASS_OK,
    DashboardStatusPoller,
    dashboard_present_state,
)
from app.domain import JobState


class _DashboardServerStub:
    """Mock transport handler serving scripted status and launch responses."""

    def __init__(self) -> None:
        self.statuses: dict[str, dict[str, str]] = {}
        self.status_code = 200
        self.raise_network_error = False
        self.launch_status_code = 200
        self.launch_payload: dict[str, str] = {"status": "success: job started", "runtime_id": "abc123"}
        self.requests: list[tuple[str, str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        if self.raise_network_error:
            raise httpx.ConnectError("connection refused", request=request)
        if request.url.path == "/jobs/statuses":
            return httpx.Response(self.status_code, json={"statuses": self.statuses})
        if request.url.path == "/jobs":
            return httpx.Response(200, json={"items": [{"key": "daily_report", "display_name": "Daily report"}]})
        if request.url.path == "/jobs/run":
            assert json.loads(request.content) == {"key": "daily_report"}
            return httpx.Response(self.launch_status_code, json=self.launch_payload)
        return httpx.Response(404)


def _build_poller(server: _DashboardServerStub, rendered: list[str] | None = None) -> DashboardStatusPoller:
    client = httpx.Client(transport=httpx.MockTransport(server), base_url="http://dashboard.test")
    return DashboardStatusPoller(
        client=client,
        cards=[("daily_report", "Daily report"), ("cleanup", "Cleanup")],
        interval_seconds=5.0,
        sleep=lambda _seconds: None,
        on_render=(lambda card: rendered.append(f"{card.key}={card.view.state}")) if rendered is not None else None,
    )


@pytest.mark.parametrize(
    ("state", "label", "css_class", "button_disabled"),
    [
        ("busy", "Running...", CSS_CLASS_OK, True),
        ("enqueued", "Waiting (queued)", CSS_CLASS_OK, True),
        ("scheduled", "Scheduled", CSS_CLASS_OK, True),
        ("retry", "Retrying", CSS_CLASS_OK, True),
        ("done", "Completed", CSS_CLASS_OK, False),
        ("dead", "Failed (dead)", CSS_CLASS_BAD, False),
        ("idle", "Idle", CSS_CLASS_NEUTRAL, False),
        ("unknown", "-", CSS_CLASS_NEUTRAL, False),
        ("garbage", "-", CSS_CLASS_NEUTRAL, False),
    ],
)
def test_dashboard_present_state_maps_labels_and_affordances(
    state: str,
    label: str,
    css_class: str,
    button_disabled: bool,
) -> None:
    """Map each state to its label, class and button affordance.

    Args:
        state: Raw state value.
        label: Expected label.
        css_class: Expected CSS class.
        button_disabled: Expected button state.

    Returns:
        None: Assertions validate presentation mapping.

    Raises:
        AssertionError: Raised when mapping differs.
    """

    view = dashboard_present_state(state)

    assert view.label == label
    assert view.css_class == css_class
    assert view.button_disabled is button_disabled


def test_dashboard_present_state_appends_runtime_id_except_for_idle() -> None:
    """Show the runtime id next to the label for tracked runs only."""

    assert dashboard_present_state(JobState.DONE, "abc123").text == "Completed (runtime id: abc123)"
    assert dashboard_present_state(JobState.IDLE, "abc123").text == "Idle"
    assert dashboard_present_state(JobState.BUSY).text == "Running..."


def test_dashboard_poller_bind_runs_once_and_renders_statuses() -> None:
    """Bind exactly once and render missing keys as idle.

    Returns:
        None: Assertions validate binding guard and render pass.

    Raises:
        AssertionError: Raised when binding or rendering differs.
    """

    server = _DashboardServerStub()
    server.statuses = {"daily_report": {"state": "busy", "runtime_id": "abc123"}}
    poller = _build_poller(server)

    assert poller.poller_bind() is True
    assert poller.poller_bind() is False
    assert poller.poller_is_bound() is True
    assert server.requests == [("GET", "/jobs/statuses")]
    assert poller.poller_card("daily_report").view.text == "Running... (runtime id: abc123)"
    assert poller.poller_card("daily_report").view.button_disabled is True
    assert poller.poller_card("cleanup").view.state == "idle"


def test_dashboard_poller_skips_failed_polls_and_keeps_previous_view() -> None:
    """Leave cards untouched after network errors and non-success responses."""

    server = _DashboardServerStub()
    server.statuses = {"daily_report": {"state": "retry", "runtime_id": "abc123"}}
    poller = _build_poller(server)
    poller.poller_refresh()

    server.status_code = 500
    assert poller.poller_refresh() is False
    server.raise_network_error = True
    assert poller.poller_refresh() is False

    assert poller.poller_card("daily_report").view.state == "retry"


def test_dashboard_poller_launch_renders_optimistic_then_confirmed_state() -> None:
    """Render enqueued immediately, then busy with the returned runtime id.

    Returns:
        None: Assertions validate optimistic launch rendering.

    Raises:
        AssertionError: Raised when the render sequence differs.
    """

    server = _DashboardServerStub()
    rendered: list[str] = []
    poller = _build_poller(server, rendered)

    assert poller.poller_launch("daily_report") is True
    assert rendered == ["daily_report=enqueued", "daily_report=busy"]
    assert poller.poller_card("daily_report").view.runtime_id == "abc123"

    server.statuses = {"daily_report": {"state": "done", "runtime_id": "abc123"}}
    poller.poller_refresh()
    assert poller.poller_card("daily_report").view.text == "Completed (runtime id: abc123)"


def test_dashboard_poller_launch_failure_renders_dead() -> None:
    """Render dead when the launch endpoint rejects the request or is unreachable."""

    server = _DashboardServerStub()
    server.launch_status_code = 404
    server.launch_payload = {"status": "error: job not found (key=daily_report)"}
    poller = _build_poller(server)

    assert poller.poller_launch("daily_report") is False
    assert poller.poller_card("daily_report").view.state == "dead"

    server.raise_network_error = True
    assert poller.poller_launch("daily_report") is False
    assert poller.poller_card("daily_report").view.label == "Failed (dead)"


def test_dashboard_poller_loads_cards_and_runs_bounded_iterations() -> None:
    """Load cards from the catalog listing and refresh once per iteration."""

    server = _DashboardServerStub()
    client = httpx.Client(transport=httpx.MockTransport(server), base_url="http://dashboard.test")
    sleeps: list[float] = []
    poller = DashboardStatusPoller(client=client, interval_seconds=2.0, sleep=sleeps.append)

    assert poller.poller_load_cards() is True
    poller.poller_run(max_iterations=2)

    assert [card.key for card in poller.poller_cards()] == ["daily_report"]
    assert sleeps == [2.0, 2.0]
    assert server.requests.count(("GET", "/jobs/statuses")) == 3
