"""Tests for memory data structures."""

from datetime import datetime

import pytest

from duet.memory.models import (
    CorrectionSignal,
    CorrectionStrength,
    Memory,
    MemoryCategory,
    MemorySearchResult,
    SessionContext,
    Visibility,
)


class TestMemory:
    """Test Memory dataclass."""

    def test_defaults(self):
        """New memories get an ID, timestamps and the fact category."""
        memory = Memory(couple_id="couple-1", content="Likes tea")

        assert memory.id
        assert memory.category == MemoryCategory.FACT
        assert memory.user_id is None
        assert memory.last_accessed_at is None
        assert isinstance(memory.created_at, datetime)

    def test_unique_ids(self):
        assert Memory().id != Memory().id

    def test_to_dict(self):
        """Enums and datetimes are serialized to plain values."""
        created = datetime(2026, 3, 1, 9, 30)
        memory = Memory(
            id="m1",
            couple_id="couple-1",
            content="Sam loves Italian food",
            user_id="user-sam",
            source_visibility=Visibility.SHARED,
            created_at=created,
            updated_at=created,
        )

        data = memory.to_dict()

        assert data["category"] == "fact"
        assert data["source_visibility"] == "shared"
        assert data["created_at"] == "2026-03-01T09:30:00"
        assert data["last_accessed_at"] is None

    def test_from_dict_minimal(self):
        """Only id, couple_id and content are required."""
        memory = Memory.from_dict({"id": "m1", "couple_id": "couple-1", "content": "x"})

        assert memory.category == MemoryCategory.FACT
        assert memory.source_visibility is None
        assert memory.created_at is not None

    def test_from_dict_missing_required(self):
        with pytest.raises(KeyError):
            Memory.from_dict({"id": "m1"})


class TestMemorySearchResult:
    """Test MemorySearchResult annotation."""

    def test_from_memory_copies_fields(self):
        memory = Memory(
            id="m1",
            couple_id="couple-1",
            content="Dr. Lee is the dentist",
            category=MemoryCategory.RELATIONSHIP,
            user_id="user-sam",
        )

        result = MemorySearchResult.from_memory(memory, relevance_score=0.75, from_partner=True)

        assert isinstance(result, Memory)
        assert result.id == "m1"
        assert result.category == MemoryCategory.RELATIONSHIP
        assert result.relevance_score == 0.75
        assert result.from_partner is True


class TestValueObjects:
    """Frozen value objects."""

    def test_session_defaults(self):
        session = SessionContext(couple_id="couple-1", user_id="user-alex")

        assert session.visibility == Visibility.SHARED
        assert session.partner_name is None

    def test_correction_signal_default_strength(self):
        assert CorrectionSignal(is_correction=False).strength == CorrectionStrength.WEAK
