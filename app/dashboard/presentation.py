"""Mapping from resolved job states to dashboard card affordances."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from app.domain import JobState

STATE_LABELS: Final[dict[str, str]] = {
    JobState.BUSY.value: "Running...",
    JobState.ENQUEUED.value: "Waiting (queued)",
    JobState.SCHEDULED.value: "Scheduled",
    JobState.RETRY.value: "Retrying",
    JobState.DEAD.value: "Failed (dead)",
    JobState.DONE.value: "Completed",
    JobState.IDLE.value: "Idle",
}
FALLBACK_LABEL: Final[str] = "-"

CSS_CLASS_OK: Final[str] = "ok"
CSS_CLASS_BAD: Final[str] = "bad"
CSS_CLASS_NEUTRAL: Final[str] = ""


@dataclass(frozen=True)
class JobCardView:
    """Render state of one job card.

    Attributes:
        state: Raw state value the view was built from.
        label: Human-readable state label.
        css_class: `ok`, `bad` or empty for neutral.
        button_disabled: Whether the launch button is disabled.
        text: Label plus runtime id when one applies.
        runtime_id: Runtime id shown on the card, if any.
    """

    state: str
    label: str
    css_class: str
    button_disabled: bool
    text: str
    runtime_id: str | None = None


def dashboard_present_state(state: str | JobState, runtime_id: str | None = None) -> JobCardView:
    """Build the card view for one state.

    The launch button is disabled only while a run is in flight. Unrecognized
    states, `unknown` included, render the fallback label with a neutral class.

    Args:
        state: Resolved or optimistic state value.
        runtime_id: Optional runtime id to display.

    Returns:
        JobCardView: Card render state.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    state_value = state.value if isinstance(state, JobState) else str(state or "")
    label = STATE_LABELS.get(state_value, FALLBACK_LABEL)

    try:
        parsed_state: JobState | None = JobState(state_value)
    except ValueError:
        parsed_state = None

    if parsed_state is not None and (parsed_state.state_is_in_flight() or parsed_state is JobState.DONE):
        css_class = CSS_CLASS_OK
    elif parsed_state is JobState.DEAD:
        css_class = CSS_CLASS_BAD
    else:
        css_class = CSS_CLASS_NEUTRAL

    button_disabled = parsed_state is not None and parsed_state.state_is_in_flight()
    shown_runtime_id = runtime_id if runtime_id and state_value != JobState.IDLE.value else None
    text = f"{label} (runtime id: {shown_runtime_id})" if shown_runtime_id else label

    return JobCardView(
        state=state_value,
        label=label,
        css_class=css_class,
        button_disabled=button_disabled,
        text=text,
        runtime_id=shown_runtime_id,
    )
