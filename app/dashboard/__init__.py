"""Dashboard package for card presentation, status polling and browser assets."""

from pathlib import Path

from .poller import DashboardStatusPoller, JobCard
from .presentation import (
	CSS_CLASS_BAD,
	CSS_CLASS_NEUTRAL,
	CSS_CLASS_OK,
	FALLBACK_LABEL,
	STATE_LABELS,
	JobCardView,
	dashboard_present_state,
)

DASHBOARD_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
DASHBOARD_STATIC_DIR = Path(__file__).resolve().parent / "static"

__all__ = [
	"CSS_CLASS_BAD",
	"CSS_CLASS_NEUTRAL",
	"CSS_CLASS_OK",
	"DASHBOARD_STATIC_DIR",
	"DASHBOARD_TEMPLATES_DIR",
	"DashboardStatusPoller",
	"FALLBACK_LABEL",
	"JobCard",
	"JobCardView",
	"STATE_LABELS",
	"dashboard_present_state",
]
