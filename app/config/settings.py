"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime, job engine and dashboard configuration.

    Environment variable names map directly to field names in uppercase.
    Example: `redis_url` reads from `REDIS_URL`.

    Attributes:
        environment_name: Runtime environment label, also used in store keys and catalog path.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        log_level: Root logging level name.
        redis_url: Redis DSN shared by the job engine adapter, cron registry and run record store.
        redis_socket_timeout_seconds: Socket timeout for every Redis call.
        engine_namespace: Optional key namespace used by the job engine storage layout.
        store_backend: Run record store backend (`redis` or `memory`).
        run_record_key_prefix: Key prefix for run record entries.
        launch_ttl_seconds: TTL written with a fresh run record.
        in_flight_ttl_seconds: TTL refreshed while a job is busy, enqueued, scheduled or retrying.
        done_ttl_seconds: TTL applied once a job is observed as done.
        dead_ttl_seconds: TTL applied once a job is observed as dead.
        catalog_source: Job catalog source (`auto`, `yaml` or `cron`).
        catalog_path: Optional YAML catalog path override.
        catalog_display_names: Display name overrides keyed by job key.
        poll_interval_seconds: Dashboard status polling interval.
        dashboard_base_url: Base URL used by the terminal poller.
        dashboard_request_timeout_seconds: HTTP timeout used by the terminal poller.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development", min_length=1)
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    redis_url: str = Field(default="redis://localhost:6379/0")
    redis_socket_timeout_seconds: float = Field(default=5.0, gt=0)
    engine_namespace: str = Field(default="")
    store_backend: str = Field(default="redis")
    run_record_key_prefix: str = Field(default="jobdash:running", min_length=1)
    launch_ttl_seconds: int = Field(default=3600, gt=0)
    in_flight_ttl_seconds: int = Field(default=3600, gt=0)
    done_ttl_seconds: int = Field(default=60, gt=0)
    dead_ttl_seconds: int = Field(default=300, gt=0)
    catalog_source: str = Field(default="auto")
    catalog_path: str | None = Field(default=None)
    catalog_display_names: dict[str, str] = Field(default_factory=dict)
    poll_interval_seconds: float = Field(default=5.0, gt=0)
    dashboard_base_url: str = Field(default="http://localhost:8000")
    dashboard_request_timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("environment_name", "redis_url", "run_record_key_prefix")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value

    @field_validator("store_backend")
    @classmethod
    def _validate_store_backend(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in {"redis", "memory"}:
            raise ValueError("store_backend must be one of: redis, memory")
        return normalized_value

    @field_validator("catalog_source")
    @classmethod
    def _validate_catalog_source(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in {"auto", "yaml", "cron"}:
            raise ValueError("catalog_source must be one of: auto, yaml, cron")
        return normalized_value

    def settings_resolve_catalog_path(self) -> str:
        """Return the YAML catalog path, defaulting to the per-environment schedule file.

        Returns:
            str: Catalog file path.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if self.catalog_path and self.catalog_path.strip():
            return self.catalog_path.strip()
        return f"config/scheduler_{self.environment_name}.yml"


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
