from __future__ import annotations


class SchedulerError(Exception):
    """Base class for errors raised by the scheduling metrics engine."""


class InvalidConfiguration(SchedulerError, ValueError):
    """
    A configuration value or process field failed validation.

    Raised before any computation starts; ``field`` names the offending
    setting so callers can point at it.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class WorkloadError(SchedulerError, ValueError):
    """A workload file could not be read or contained a malformed entry."""
