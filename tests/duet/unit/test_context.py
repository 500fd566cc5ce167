"""Tests for memory context formatting."""

from duet.memory.context import MEMORY_USAGE_GUIDANCE, build_memory_context
from duet.memory.models import MemoryCategory


class TestBuildMemoryContext:
    """Test build_memory_context function."""

    def test_empty_returns_empty_string(self):
        """No memories means no block at all."""
        assert build_memory_context([]) == ""

    def test_single_fact_exact_output(self, make_result):
        """A single fact renders only the Facts section and the footer."""
        context = build_memory_context([make_result("Likes green tea")])

        assert context == (
            "## What You Remember About This Couple\n"
            "\n"
            "**Facts:**\n"
            "- Likes green tea\n"
            "\n" + MEMORY_USAGE_GUIDANCE
        )
        assert "**People:**" not in context
        assert "**Current Context:**" not in context

    def test_groups_in_fixed_order(self, make_result):
        """Groups appear as facts, people, context regardless of input order."""
        memories = [
            make_result("Moving in June", MemoryCategory.CONTEXT),
            make_result("Allergic to shellfish", MemoryCategory.FACT),
            make_result("Sister is called Mia", MemoryCategory.RELATIONSHIP),
        ]
        context = build_memory_context(memories)

        facts = context.index("**Facts:**")
        people = context.index("**People:**")
        current = context.index("**Current Context:**")
        assert facts < people < current
        assert context.index("- Allergic to shellfish") < people
        assert people < context.index("- Sister is called Mia") < current
        assert context.index("- Moving in June") > current

    def test_preserves_input_order_within_group(self, make_result):
        """Memories are not re-sorted inside a group."""
        memories = [
            make_result("Second best", relevance_score=0.2),
            make_result("Best match", relevance_score=0.9),
        ]
        context = build_memory_context(memories)

        assert context.index("- Second best") < context.index("- Best match")

    def test_partner_attribution(self, make_result):
        """Partner-originated memories are marked."""
        memories = [
            make_result("Loves hiking", from_partner=True),
            make_result("Hates mornings"),
        ]
        context = build_memory_context(memories)

        assert "- Loves hiking (from partner)" in context
        assert "- Hates mornings\n" in context
        assert "Hates mornings (from partner)" not in context

    def test_footer_always_present(self, make_result):
        """The usage guidance is identical for every non-empty block."""
        only_people = build_memory_context(
            [make_result("Dr. Lee is the dentist", MemoryCategory.RELATIONSHIP)]
        )
        only_context = build_memory_context(
            [make_result("Renovating the kitchen", MemoryCategory.CONTEXT)]
        )

        assert only_people.endswith(MEMORY_USAGE_GUIDANCE)
        assert only_context.endswith(MEMORY_USAGE_GUIDANCE)
        assert "**Facts:**" not in only_people
        assert "**Facts:**" not in only_context

    def test_footer_contains_usage_rules(self):
        """The footer covers citing, confirming and clarifying conflicts."""
        assert "**Using Memories:**" in MEMORY_USAGE_GUIDANCE
        assert "cite it naturally" in MEMORY_USAGE_GUIDANCE
        assert "ask for confirmation" in MEMORY_USAGE_GUIDANCE
        assert "has that changed?" in MEMORY_USAGE_GUIDANCE
