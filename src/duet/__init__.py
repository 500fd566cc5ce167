"""Duet - Shared memory retrieval and correction for a couple's assistant."""

__version__ = "0.1.0"

from duet.memory.models import (
    CorrectionSignal,
    CorrectionStrength,
    Memory,
    MemoryCategory,
    MemorySearchResult,
    SessionContext,
    Visibility,
)

__all__ = [
    "Memory",
    "MemoryCategory",
    "MemorySearchResult",
    "SessionContext",
    "Visibility",
    "CorrectionSignal",
    "CorrectionStrength",
]
