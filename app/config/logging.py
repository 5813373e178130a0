"""Process-wide logging configuration for runtime entrypoints."""

import logging

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def config_configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the current process.

    Args:
        level: Logging level name.

    Returns:
        None: Logging is configured as a side effect.

    Raises:
        ValueError: Raised when the level name is unknown.
    """

    numeric_level = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"unsupported log level={level}")
    logging.basicConfig(level=numeric_level, format=_LOG_FORMAT)
