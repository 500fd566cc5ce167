"""Scoped memory retrieval for the current message."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from loguru import logger

from duet.memory.models import MemorySearchResult, SessionContext
from duet.memory.triggers import calculate_memory_limit

if TYPE_CHECKING:
    from duet.storage.base import MemoryStore


async def get_memories_for_context(
    store: MemoryStore,
    session: SessionContext,
    message: str,
) -> List[MemorySearchResult]:
    """
    Retrieve memories relevant to the current message.

    Callers are expected to check should_retrieve_memories() first. Ranking
    and visibility filtering are the store's job; results come back in the
    store's order. Store errors propagate to the caller.

    Args:
        store: Memory store to query
        session: Identity and visibility of the current message
        message: The incoming user message (used as the query)

    Returns:
        Memories in descending relevance, at most calculate_memory_limit(message)
    """
    limit = calculate_memory_limit(message)
    logger.debug(
        f"Searching memories for couple {session.couple_id} "
        f"(visibility={session.visibility.value}, limit={limit})"
    )

    return await store.search_memories(
        couple_id=session.couple_id,
        user_id=session.user_id,
        query=message,
        visibility=session.visibility,
        limit=limit,
    )
