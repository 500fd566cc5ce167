"""Tests for memory visibility rules."""

import pytest

from duet.memory.models import Memory, Visibility
from duet.memory.privacy import is_from_partner, is_memory_visible


def _memory(user_id=None, source_visibility=None) -> Memory:
    return Memory(
        couple_id="couple-1",
        content="Something",
        user_id=user_id,
        source_visibility=source_visibility,
    )


class TestIsMemoryVisible:
    """Test is_memory_visible function."""

    @pytest.mark.parametrize("visibility", [Visibility.SHARED, Visibility.DM])
    def test_couple_level_always_visible(self, visibility):
        """Memories without an author are visible everywhere."""
        assert is_memory_visible(_memory(), "user-alex", visibility) is True

    @pytest.mark.parametrize("source", [Visibility.SHARED, Visibility.DM])
    @pytest.mark.parametrize("visibility", [Visibility.SHARED, Visibility.DM])
    def test_own_memories_always_visible(self, source, visibility):
        """A user always sees their own memories."""
        memory = _memory(user_id="user-alex", source_visibility=source)
        assert is_memory_visible(memory, "user-alex", visibility) is True

    def test_partner_memories_hidden_in_dm(self):
        """A partner's memories never show in a private thread."""
        memory = _memory(user_id="user-sam", source_visibility=Visibility.SHARED)
        assert is_memory_visible(memory, "user-alex", Visibility.DM) is False

    def test_partner_shared_memories_visible_in_shared(self):
        """A partner's shared-thread memories show in the shared thread."""
        memory = _memory(user_id="user-sam", source_visibility=Visibility.SHARED)
        assert is_memory_visible(memory, "user-alex", Visibility.SHARED) is True

    def test_partner_dm_memories_hidden_in_shared(self):
        """A partner's private-thread memories stay private."""
        memory = _memory(user_id="user-sam", source_visibility=Visibility.DM)
        assert is_memory_visible(memory, "user-alex", Visibility.SHARED) is False


class TestIsFromPartner:
    """Test is_from_partner function."""

    def test_partner_authored(self):
        assert is_from_partner(_memory(user_id="user-sam"), "user-alex") is True

    def test_own_memory(self):
        assert is_from_partner(_memory(user_id="user-alex"), "user-alex") is False

    def test_couple_level(self):
        assert is_from_partner(_memory(), "user-alex") is False
