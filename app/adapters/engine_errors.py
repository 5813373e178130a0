"""Project-native typed exceptions for job engine adapter failures."""

from __future__ import annotations


class JobEngineError(Exception):
    """Base exception for adapter-level job engine failures.

    Attributes:
        collection: Optional engine collection label involved in the failure.
    """

    def __init__(self, message: str, collection: str | None = None):
        super().__init__(message)
        self.collection = collection


class JobEngineConnectionError(JobEngineError, ConnectionError):
    """Transport-level connectivity failure while talking to the engine store."""


class JobEngineTimeoutError(JobEngineError, TimeoutError):
    """Engine store call exceeded the configured socket timeout."""


class JobEngineMalformedEntryError(JobEngineError, ValueError):
    """Engine collection entry could not be decoded into a job payload."""


class JobEngineSubmissionError(JobEngineError, RuntimeError):
    """Engine rejected or failed to persist a new job submission."""
