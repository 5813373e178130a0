"""Store health service implementations for connectivity checks."""

import redis

from app.domain import HealthStatus

from .interfaces import StoreHealthPort


class RedisStoreHealthService(StoreHealthPort):
    """Store health service backed by Redis `PING` checks."""

    def __init__(self, client: redis.Redis):
        """Initialize store health service.

        Args:
            client: Redis client used for connectivity checks.

        Raises:
            ValueError: Raised when client is None.
        """

        if client is None:
            raise ValueError("client must not be None")
        self._client = client

    def store_backend_name(self) -> str:
        return "redis"

    def store_connection_label(self) -> str:
        """Return the target Redis endpoint for diagnostics.

        Returns:
            str: `host:port/db` label without credentials.

        Raises:
            RuntimeError: Raised if connection metadata is unavailable.
        """

        connection_kwargs = self._client.connection_pool.connection_kwargs
        host = connection_kwargs.get("host", "localhost")
        port = connection_kwargs.get("port", 6379)
        database = connection_kwargs.get("db", 0)
        return f"redis://{host}:{port}/{database}"

    def store_check_health(self) -> HealthStatus:
        """Verify Redis connectivity using a deterministic lightweight command.

        Returns:
            HealthStatus: Health payload with status and diagnostic detail.

        Raises:
            ConnectionError: Raised when connectivity check fails.
        """

        try:
            self._client.ping()
            return HealthStatus(status="ok", detail="redis connectivity verified")
        except redis.RedisError as error:
            raise ConnectionError("redis connectivity check failed") from error


class InMemoryStoreHealthService(StoreHealthPort):
    """Health service for the in-process store backend."""

    def store_backend_name(self) -> str:
        return "memory"

    def store_connection_label(self) -> str:
        return "memory://"

    def store_check_health(self) -> HealthStatus:
        return HealthStatus(status="ok", detail="in-memory store")
