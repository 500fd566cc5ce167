"""Memory storage backends."""

from duet.storage.base import MemoryStore
from duet.storage.local_store import LocalMemoryStore

__all__ = ["MemoryStore", "LocalMemoryStore"]
