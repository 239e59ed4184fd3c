from __future__ import annotations


class HealthLogError(Exception):
    """Base class for errors that abort a skill request."""


class UnrecognizedIntentError(HealthLogError):
    def __init__(self, intent_name: str | None) -> None:
        super().__init__(f"Unrecognized intent: {intent_name}")
        self.intent_name = intent_name


class StorageError(HealthLogError):
    """Raised when a metric record cannot be read, written or decoded."""


class EnvelopeError(HealthLogError, ValueError):
    """Raised when an inbound request envelope is missing required fields."""
