"""Visibility rules for memories shared between partners.

Rules:
1. Couple-level memories (no author) are always visible
2. A user's own memories are always visible to them
3. A partner's memories are never visible in a private (dm) thread
4. In a shared thread, a partner's memories are visible unless they
   were learned in the partner's private thread
"""

from duet.memory.models import Memory, Visibility


def is_memory_visible(memory: Memory, user_id: str, visibility: Visibility) -> bool:
    """Check whether a memory may be shown to user_id in a thread of this visibility."""
    if memory.user_id is None:
        return True

    if memory.user_id == user_id:
        return True

    if visibility == Visibility.DM:
        return False

    return memory.source_visibility != Visibility.DM


def is_from_partner(memory: Memory, user_id: str) -> bool:
    """True when the memory was authored by someone other than user_id."""
    return memory.user_id is not None and memory.user_id != user_id
