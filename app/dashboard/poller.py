"""HTTP status poller binding dashboard cards to the status and launch endpoints.

Client-side views are transient: an optimistic state rendered after a click
is overwritten unconditionally by the next successful poll.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable

import httpx

from app.domain import JobState

from .presentation import JobCardView, dashboard_present_state

logger = logging.getLogger(__name__)


@dataclass
class JobCard:
    """Mutable client-side card for one job key.

    Attributes:
        key: Job key.
        display_name: Card title.
        view: Current render state.
    """

    key: str
    display_name: str
    view: JobCardView


class DashboardStatusPoller:
    """Poll `/jobs/statuses` on a fixed interval and launch jobs through `/jobs/run`."""

    STATUSES_PATH = "/jobs/statuses"
    LAUNCH_PATH = "/jobs/run"
    CATALOG_PATH = "/jobs"

    def __init__(
        self,
        client: httpx.Client,
        cards: Iterable[tuple[str, str]] = (),
        interval_seconds: float = 5.0,
        sleep: Callable[[float], None] | None = None,
        on_render: Callable[[JobCard], None] | None = None,
    ):
        """Initialize dashboard poller.

        Args:
            client: HTTP client whose base URL points at the dashboard service.
            cards: Initial `(key, display_name)` pairs.
            interval_seconds: Refresh interval.
            sleep: Optional sleep function used between refreshes.
            on_render: Optional callback invoked after each card render.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when client is None or interval is not positive.
        """

        if client is None:
            raise ValueError("client must not be None")
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")

        self._client = client
        self._interval_seconds = interval_seconds
        self._sleep = sleep or time.sleep
        self._on_render = on_render
        self._cards: dict[str, JobCard] = {}
        self._bound = False
        for key, display_name in cards:
            self._cards[key] = JobCard(key=key, display_name=display_name, view=dashboard_present_state(JobState.IDLE))

    def poller_cards(self) -> list[JobCard]:
        return list(self._cards.values())

    def poller_card(self, key: str) -> JobCard | None:
        return self._cards.get(key)

    def poller_load_cards(self) -> bool:
        """Load card keys and titles from the catalog listing endpoint.

        Returns:
            bool: True when the listing was loaded.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        payload = self._poller_get_json(self.CATALOG_PATH)
        if payload is None:
            return False
        for item in payload.get("items", []):
            key = str(item.get("key") or "").strip()
            if not key or key in self._cards:
                continue
            self._cards[key] = JobCard(
                key=key,
                display_name=str(item.get("display_name") or key),
                view=dashboard_present_state(JobState.IDLE),
            )
        return True

    def poller_bind(self) -> bool:
        """Attach the poller once and perform the initial refresh.

        Returns:
            bool: True on first binding, False when already bound.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        if self._bound:
            return False
        self._bound = True
        self.poller_refresh()
        return True

    def poller_is_bound(self) -> bool:
        return self._bound

    def poller_refresh(self) -> bool:
        """Fetch the status map and re-render every card.

        Network failures and non-success responses are skipped; the cards keep
        their previous view until the next successful poll.

        Returns:
            bool: True when cards were re-rendered.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        payload = self._poller_get_json(self.STATUSES_PATH)
        if payload is None:
            return False
        statuses = payload.get("statuses")
        if not isinstance(statuses, dict):
            logger.debug("Skipping status refresh without a statuses object")
            return False

        for card in self._cards.values():
            entry = statuses.get(card.key)
            if not isinstance(entry, dict):
                entry = {"state": JobState.IDLE.value}
            self._poller_render(card, entry.get("state"), entry.get("runtime_id"))
        return True

    def poller_launch(self, key: str) -> bool:
        """Launch one job with an optimistic render before server confirmation.

        Args:
            key: Job key of the clicked card.

        Returns:
            bool: True when the launch endpoint reported success.

        Raises:
            KeyError: Raised when no card exists for key.
        """

        card = self._cards[key]
        self._poller_render(card, JobState.ENQUEUED.value, None)

        try:
            response = self._client.post(self.LAUNCH_PATH, json={"key": key})
            payload = response.json() if response.content else {}
        except (httpx.HTTPError, ValueError) as error:
            logger.warning("Launch request failed for key=%s: %s", key, error)
            self._poller_render(card, JobState.DEAD.value, None)
            return False

        runtime_id = payload.get("runtime_id") if isinstance(payload, dict) else None
        if response.is_success and runtime_id:
            self._poller_render(card, JobState.BUSY.value, str(runtime_id))
            return True

        logger.warning("Launch rejected for key=%s status_code=%s", key, response.status_code)
        self._poller_render(card, JobState.DEAD.value, None)
        return False

    def poller_run(self, max_iterations: int | None = None) -> None:
        """Bind, then refresh every interval until the iteration budget is spent.

        Args:
            max_iterations: Optional number of interval refreshes after the initial one.

        Returns:
            None: Runs until interrupted when max_iterations is None.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        self.poller_bind()
        completed_iterations = 0
        while max_iterations is None or completed_iterations < max_iterations:
            self._sleep(self._interval_seconds)
            self.poller_refresh()
            completed_iterations += 1

    def _poller_get_json(self, path: str) -> dict | None:
        try:
            response = self._client.get(path, headers={"Accept": "application/json"})
        except httpx.HTTPError as error:
            logger.debug("Skipping poll of %s after network error: %s", path, error)
            return None
        if not response.is_success:
            logger.debug("Skipping poll of %s after status_code=%s", path, response.status_code)
            return None
        try:
            payload = response.json()
        except ValueError:
            logger.debug("Skipping poll of %s with non-JSON body", path)
            return None
        return payload if isinstance(payload, dict) else None

    def _poller_render(self, card: JobCard, state: object, runtime_id: object) -> None:
        card.view = dashboard_present_state(
            str(state or ""),
            str(runtime_id) if runtime_id else None,
        )
        if self._on_render is not None:
            self._on_render(card)
