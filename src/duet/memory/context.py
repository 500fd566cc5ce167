"""Formatting of retrieved memories for the system prompt."""

from typing import List, Sequence

from duet.memory.models import MemoryCategory, MemorySearchResult


MEMORY_CONTEXT_HEADING = "## What You Remember About This Couple\n"

# Group order and headers
CATEGORY_HEADERS = (
    (MemoryCategory.FACT, "**Facts:**"),
    (MemoryCategory.RELATIONSHIP, "**People:**"),
    (MemoryCategory.CONTEXT, "**Current Context:**"),
)

PARTNER_ATTRIBUTION = " (from partner)"

MEMORY_USAGE_GUIDANCE = (
    "\n**Using Memories:**\n"
    '- When you use information from memory, cite it naturally: "I remember you mentioned..." or "You told me before that..."\n'
    "- If you're uncertain about a memory, you can ask for confirmation\n"
    '- If new information conflicts with what you remember, ask for clarification: "I thought you mentioned X - has that changed?"'
)


def build_memory_context(memories: Sequence[MemorySearchResult]) -> str:
    """
    Format retrieved memories for injection into the system prompt.

    Memories are grouped by category (facts, people, current context) and
    keep their input order inside each group. Empty groups are left out.
    The usage guidance footer is always appended.

    Args:
        memories: Memories as returned by the store

    Returns:
        Formatted memory block, or "" when there are no memories
    """
    if not memories:
        return ""

    lines: List[str] = [MEMORY_CONTEXT_HEADING]

    for category, header in CATEGORY_HEADERS:
        group = [m for m in memories if m.category == category]
        if not group:
            continue

        lines.append(header)
        for memory in group:
            source = PARTNER_ATTRIBUTION if memory.from_partner else ""
            lines.append(f"- {memory.content}{source}")
        lines.append("")

    lines.append(MEMORY_USAGE_GUIDANCE)

    return "\n".join(lines)
