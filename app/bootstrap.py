"""Application bootstrap wiring for startup validation and dependency assembly."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI

from app.adapters import JobStateSourceAdapter, RedisJobEngineAdapter
from app.api import create_api_application
from app.catalog import AutoJobCatalog, JobCatalogPort, RedisCronJobCatalog, YamlJobCatalog
from app.config import AppSettings, config_load_settings
from app.jobs import JobLauncher, JobStatusService, RunRecordCachePolicy, StatusResolver
from app.store import (
    InMemoryRunRecordStore,
    InMemoryStoreHealthService,
    RedisRunRecordStore,
    RedisStoreHealthService,
    RunRecordStorePort,
    StoreHealthPort,
    store_create_redis_client,
)


@dataclass(frozen=True)
class BootstrapServices:
    """Fully wired runtime services shared by every trigger surface.

    Attributes:
        settings: Validated runtime settings.
        catalog: Job catalog.
        store: Run record store.
        store_health_service: Store health service.
        launcher: Job launcher.
        status_service: Status service.
    """

    settings: AppSettings
    catalog: JobCatalogPort
    store: RunRecordStorePort
    store_health_service: StoreHealthPort
    launcher: JobLauncher
    status_service: JobStatusService


def bootstrap_create_services(settings: AppSettings | None = None) -> BootstrapServices:
    """Assemble catalog, engine, store, launcher and status services.

    Args:
        settings: Optional pre-validated settings; loaded from the environment when omitted.

    Returns:
        BootstrapServices: Wired runtime services.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    redis_client = store_create_redis_client(
        redis_url=resolved_settings.redis_url,
        socket_timeout_seconds=resolved_settings.redis_socket_timeout_seconds,
    )

    if resolved_settings.store_backend == "memory":
        store: RunRecordStorePort = InMemoryRunRecordStore()
        store_health_service: StoreHealthPort = InMemoryStoreHealthService()
    else:
        store = RedisRunRecordStore(
            client=redis_client,
            environment_name=resolved_settings.environment_name,
            key_prefix=resolved_settings.run_record_key_prefix,
        )
        store_health_service = RedisStoreHealthService(client=redis_client)

    catalog = bootstrap_create_catalog(settings=resolved_settings, redis_client=redis_client)
    engine = RedisJobEngineAdapter(client=redis_client, namespace=resolved_settings.engine_namespace)
    resolver = StatusResolver(store=store, sources=JobStateSourceAdapter(engine=engine))
    launcher = JobLauncher(
        catalog=catalog,
        engine=engine,
        store=store,
        launch_ttl_seconds=resolved_settings.launch_ttl_seconds,
    )
    status_service = JobStatusService(
        catalog=catalog,
        resolver=resolver,
        store=store,
        cache_policy=RunRecordCachePolicy(
            in_flight_ttl_seconds=resolved_settings.in_flight_ttl_seconds,
            done_ttl_seconds=resolved_settings.done_ttl_seconds,
            dead_ttl_seconds=resolved_settings.dead_ttl_seconds,
        ),
    )
    return BootstrapServices(
        settings=resolved_settings,
        catalog=catalog,
        store=store,
        store_health_service=store_health_service,
        launcher=launcher,
        status_service=status_service,
    )


def bootstrap_create_catalog(settings: AppSettings, redis_client) -> JobCatalogPort:
    """Build the job catalog selected by `catalog_source`.

    Args:
        settings: Validated runtime settings.
        redis_client: Redis client for the cron registry.

    Returns:
        JobCatalogPort: YAML, cron registry, or auto-selecting catalog.

    Raises:
        ValueError: Raised when catalog inputs are invalid.
    """

    static_catalog = YamlJobCatalog(
        path=settings.settings_resolve_catalog_path(),
        display_names=settings.catalog_display_names,
    )
    if settings.catalog_source == "yaml":
        return static_catalog

    registry_catalog = RedisCronJobCatalog(
        client=redis_client,
        namespace=settings.engine_namespace,
        display_names=settings.catalog_display_names,
    )
    if settings.catalog_source == "cron":
        return registry_catalog
    return AutoJobCatalog(registry_catalog=registry_catalog, static_catalog=static_catalog)


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-validated settings.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    services = bootstrap_create_services(settings=settings)
    return create_api_application(
        settings=services.settings,
        store_health_service=services.store_health_service,
        catalog=services.catalog,
        launcher=services.launcher,
        status_service=services.status_service,
    )
