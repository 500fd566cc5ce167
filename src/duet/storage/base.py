"""Abstract interface for memory stores."""

from abc import ABC, abstractmethod
from typing import List, Optional

from duet.config.constants import DEFAULT_SIMILARITY_THRESHOLD
from duet.memory.models import Memory, MemorySearchResult, Visibility


class MemoryStore(ABC):
    """
    Abstract base class for memory stores.

    The store owns persistence, ranking and visibility filtering. Callers
    treat its result order as authoritative. Missing memories are reported
    through return values (None / False); any raised exception is a store
    failure and is left to propagate.
    """

    @abstractmethod
    async def search_memories(
        self,
        couple_id: str,
        user_id: str,
        query: str,
        visibility: Visibility,
        limit: int,
    ) -> List[MemorySearchResult]:
        """
        Search a couple's memories visible to a user.

        Args:
            couple_id: Couple whose memories are searched
            user_id: Requesting user (decides partner attribution and privacy)
            query: Free-text query, usually the incoming message
            visibility: Visibility of the requesting thread
            limit: Maximum number of results

        Returns:
            Memories in descending relevance
        """
        pass

    @abstractmethod
    async def find_similar_memories(
        self,
        couple_id: str,
        content: str,
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    ) -> List[Memory]:
        """
        Find a couple's memories similar to some text.

        Args:
            couple_id: Couple whose memories are searched
            content: Text to compare against
            threshold: Minimum similarity (0.0 to 1.0)

        Returns:
            Matching memories, best match first
        """
        pass

    @abstractmethod
    async def update_memory(self, memory_id: str, content: str) -> Optional[Memory]:
        """Replace a memory's content. Returns None if the memory does not exist."""
        pass

    @abstractmethod
    async def delete_memory(self, memory_id: str) -> bool:
        """Delete a memory. Returns False if the memory does not exist."""
        pass
