"""Redis client factory utilities.

This module centralizes Redis connectivity primitives so every layer shares the
same timeout policy.
"""

import redis


def store_create_redis_client(redis_url: str, socket_timeout_seconds: float = 5.0) -> redis.Redis:
    """Create the Redis client used by store, engine and catalog adapters.

    Args:
        redis_url: Redis DSN.
        socket_timeout_seconds: Connect and read timeout for every command.

    Returns:
        redis.Redis: Client returning decoded `str` values.

    Raises:
        ValueError: Raised when the URL is blank or the timeout is not positive.
    """

    if not redis_url.strip():
        raise ValueError("redis_url must not be blank")
    if socket_timeout_seconds <= 0:
        raise ValueError("socket_timeout_seconds must be > 0")

    return redis.Redis.from_url(
        redis_url.strip(),
        decode_responses=True,
        socket_timeout=socket_timeout_seconds,
        socket_connect_timeout=socket_timeout_seconds,
    )
