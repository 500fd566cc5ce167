"""Custom exceptions for Duet."""


class DuetError(Exception):
    """Base exception for all Duet errors."""

    pass


class ConfigurationError(DuetError):
    """Configuration loading or validation error."""

    pass


class MemoryStoreError(DuetError):
    """The local memory store could not read or write its data."""

    pass
