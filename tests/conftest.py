"""Pytest configuration and fixtures for Duet tests."""

from datetime import datetime, timedelta
from typing import List
from unittest.mock import AsyncMock

import pytest

from duet.memory.models import (
    Memory,
    MemoryCategory,
    MemorySearchResult,
    SessionContext,
    Visibility,
)
from duet.storage.base import MemoryStore
from duet.storage.local_store import LocalMemoryStore


COUPLE_ID = "couple-1"
OTHER_COUPLE_ID = "couple-2"
ALEX = "user-alex"
SAM = "user-sam"


@pytest.fixture
def shared_session() -> SessionContext:
    """Alex writing in the couple's shared thread."""
    return SessionContext(
        couple_id=COUPLE_ID,
        user_id=ALEX,
        visibility=Visibility.SHARED,
        user_name="Alex",
        partner_name="Sam",
        thread_id="thread-shared",
    )


@pytest.fixture
def dm_session() -> SessionContext:
    """Alex writing in their private thread."""
    return SessionContext(
        couple_id=COUPLE_ID,
        user_id=ALEX,
        visibility=Visibility.DM,
        user_name="Alex",
        partner_name="Sam",
        thread_id="thread-alex",
    )


@pytest.fixture
def mock_store() -> AsyncMock:
    """Store double with all MemoryStore coroutines mocked."""
    store = AsyncMock(spec=MemoryStore)
    store.search_memories.return_value = []
    store.find_similar_memories.return_value = []
    store.update_memory.return_value = None
    store.delete_memory.return_value = False
    return store


@pytest.fixture
def make_result():
    """Factory for search results used by formatter and retriever tests."""

    def _make(
        content: str,
        category: MemoryCategory = MemoryCategory.FACT,
        from_partner: bool = False,
        relevance_score: float = 1.0,
    ) -> MemorySearchResult:
        return MemorySearchResult(
            couple_id=COUPLE_ID,
            content=content,
            category=category,
            relevance_score=relevance_score,
            from_partner=from_partner,
        )

    return _make


def sample_memories() -> List[Memory]:
    """A small couple history covering every visibility rule."""
    base = datetime(2026, 1, 1, 12, 0, 0)
    return [
        Memory(
            id="mem-mom",
            couple_id=COUPLE_ID,
            content="Mom's name is Susan",
            category=MemoryCategory.RELATIONSHIP,
            user_id=None,
            created_at=base,
            updated_at=base,
        ),
        Memory(
            id="mem-peanuts",
            couple_id=COUPLE_ID,
            content="Alex is allergic to peanuts",
            category=MemoryCategory.FACT,
            user_id=ALEX,
            source_visibility=Visibility.SHARED,
            created_at=base + timedelta(days=1),
            updated_at=base + timedelta(days=1),
        ),
        Memory(
            id="mem-italian",
            couple_id=COUPLE_ID,
            content="Sam loves Italian food",
            category=MemoryCategory.FACT,
            user_id=SAM,
            source_visibility=Visibility.SHARED,
            created_at=base + timedelta(days=2),
            updated_at=base + timedelta(days=2),
        ),
        Memory(
            id="mem-party",
            couple_id=COUPLE_ID,
            content="Sam is planning a surprise party for Alex",
            category=MemoryCategory.CONTEXT,
            user_id=SAM,
            source_visibility=Visibility.DM,
            created_at=base + timedelta(days=3),
            updated_at=base + timedelta(days=3),
        ),
        Memory(
            id="mem-other-mom",
            couple_id=OTHER_COUPLE_ID,
            content="Mom visits every Sunday",
            category=MemoryCategory.CONTEXT,
            user_id=None,
            created_at=base,
            updated_at=base,
        ),
    ]


@pytest.fixture
def local_store() -> LocalMemoryStore:
    """Local store preloaded with sample_memories()."""
    store = LocalMemoryStore()
    for memory in sample_memories():
        store.add_memory(memory)
    return store
