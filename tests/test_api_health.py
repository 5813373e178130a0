"""Tests for API health endpoint behavior.

These tests validate deterministic response behavior for healthy and
store-unavailable states.
"""

from fastapi.testclient import TestClient

from app.api.application import create_api_application
from app.config import AppSettings
from app.domain import HealthStatus, JobDefinition
from app.jobs import LaunchResult
from app.store import InMemoryStoreHealthService


class _HealthyStoreService:
    """Test double that simulates a healthy store target."""

    def store_backend_name(self) -> str:
        return "redis"

    def store_connection_label(self) -> str:
        """Return deterministic target label.

        Returns:
            str: Health target label.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        return "redis://test:6379/0"

    def store_check_health(self) -> HealthStatus:
        """Return healthy store result.

        Returns:
            HealthStatus: Healthy store response.

        Raises:
            ConnectionError: Never raised by this test double.
        """

        return HealthStatus(status="ok", detail="redis connectivity verified")


class _FailingStoreService:
    """Test double that simulates a store connectivity failure."""

    def store_backend_name(self) -> str:
        return "redis"

    def store_connection_label(self) -> str:
        return "redis://test:6379/0"

    def store_check_health(self) -> HealthStatus:
        """Raise deterministic connection error.

        Returns:
            HealthStatus: This method does not return.

        Raises:
            ConnectionError: Always raised by this test double.
        """

        raise ConnectionError("redis connectivity check failed")


class _EmptyCatalogStub:
    """Minimal catalog stub for API factory dependency injection."""

    def catalog_source_name(self) -> str:
        return "empty"

    def catalog_list_jobs(self) -> list[JobDefinition]:
        return []

    def catalog_get_job(self, key: str) -> JobDefinition | None:
        return None


class _LauncherStub:
    """Minimal launcher stub for API factory dependency injection."""

    def job_launch(self, key: str) -> LaunchResult:
        return LaunchResult.error(key=key, reason=f"job not found (key={key})", error_code="UNKNOWN_JOB")


class _StatusServiceStub:
    """Minimal status service stub for API factory dependency injection."""

    def status_get_all(self) -> dict:
        return {}


def _build_settings() -> AppSettings:
    """Create test settings object.

    Returns:
        AppSettings: Deterministic test settings for API creation.

    Raises:
        ValueError: Raised by AppSettings when values are invalid.
    """

    return AppSettings(environment_name="test", store_backend="memory")


def _build_client(store_health_service: object) -> TestClient:
    application = create_api_application(
        _build_settings(),
        store_health_service,
        _EmptyCatalogStub(),
        _LauncherStub(),
        _StatusServiceStub(),
    )
    return TestClient(application)


def test_api_health_returns_success_when_store_is_available() -> None:
    """Return HTTP 200 and healthy payload when the store reports success.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    response = _build_client(_HealthyStoreService()).get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "app": "up",
        "store": {
            "backend": "redis",
            "target": "redis://test:6379/0",
            "state": "ok",
            "detail": "redis connectivity verified",
        },
    }


def test_api_health_returns_service_unavailable_when_store_is_down() -> None:
    """Return HTTP 503 and degraded payload when the store reports failure.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    response = _build_client(_FailingStoreService()).get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["app"] == "up"
    assert response.json()["store"] == {
        "backend": "redis",
        "target": "redis://test:6379/0",
        "state": "down",
        "detail": "redis connectivity check failed",
    }


def test_api_info_reports_environment() -> None:
    """Return runtime metadata for bootstrap verification."""

    response = _build_client(_HealthyStoreService()).get("/info")

    assert response.status_code == 200
    assert response.json() == {"service": "job-dashboard", "status": "ready", "environment": "test"}


def test_api_health_reports_memory_backend() -> None:
    """Report the in-process backend and its fixed target label."""

    response = _build_client(InMemoryStoreHealthService()).get("/health")

    assert response.status_code == 200
    assert response.json()["store"]["backend"] == "memory"
    assert response.json()["store"]["target"] == "memory://"
