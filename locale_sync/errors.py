"""
Exception hierarchy for a synchronization run.

Every error aborts the run before anything is written back.
"""

from __future__ import annotations


class LocaleSyncError(Exception):
    """Base class for every error raised by the engine."""


class ConfigurationError(LocaleSyncError):
    """Invalid config file, persistence paths, source document or locale tag."""


class SchemaError(ConfigurationError):
    """A document cannot be turned into a structural schema."""

    def __init__(self, message: str, path: tuple = ()) -> None:
        self.path = path
        super().__init__(message)


class PlanningError(LocaleSyncError):
    """The token budget cannot fit the requested translation."""


class ProviderError(LocaleSyncError):
    """The translation provider returned nothing usable."""


class SchemaValidationError(LocaleSyncError):
    """Provider output does not match the master schema."""

    def __init__(self, message: str, locale: str | None = None, path: tuple = ()) -> None:
        self.locale = locale
        self.path = path
        where = ".".join(str(p) for p in path) or "<root>"
        super().__init__(f"{message} (at {where})")
