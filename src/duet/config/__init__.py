"""Duet configuration module."""

from duet.config.settings import (
    CorrectionSettings,
    LoggingSettings,
    RetrievalSettings,
    Settings,
    StorageSettings,
)

__all__ = [
    "Settings",
    "RetrievalSettings",
    "CorrectionSettings",
    "StorageSettings",
    "LoggingSettings",
]
