"""Utility functions and helpers for Duet."""

from duet.utils.exceptions import ConfigurationError, DuetError, MemoryStoreError
from duet.utils.logging import configure_logging

__all__ = [
    "configure_logging",
    "DuetError",
    "ConfigurationError",
    "MemoryStoreError",
]
