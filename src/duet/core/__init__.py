"""Duet Core - Memory coordination layer."""

from duet.core.engine import CorrectionCheck, MemoryEngine

__all__ = [
    "MemoryEngine",
    "CorrectionCheck",
]
