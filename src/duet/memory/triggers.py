"""Heuristics deciding whether, and how much, memory to retrieve."""

import re
from typing import Pattern, Tuple

from duet.config.constants import (
    BASE_MEMORY_LIMIT,
    DEFAULT_RETRIEVAL_MIN_CHARS,
    LONG_MESSAGE_BONUS,
    LONG_MESSAGE_WORD_COUNT,
    MAX_MEMORY_LIMIT,
    MULTI_TOPIC_BONUS,
    QUESTION_BONUS,
    SHORT_MESSAGE_MAX_CHARS,
)


# Messages that never need memory. Checked before TRIGGER_PATTERNS.
SKIP_PATTERNS: Tuple[Pattern[str], ...] = (
    # Simple greetings
    re.compile(
        r"^(hi|hey|hello|good morning|good afternoon|good evening|yo|sup)[\s!.?]*$",
        re.IGNORECASE,
    ),
    # Simple acknowledgments
    re.compile(
        r"^(ok|okay|sure|thanks|thank you|thx|got it|cool|nice|great|perfect|yes|no|yep|nope)[\s!.?]*$",
        re.IGNORECASE,
    ),
    # Bot commands
    re.compile(r"^/(link|unlink|status|auth|calendar|help)", re.IGNORECASE),
    # Very short messages
    re.compile(r"^.{1,%d}\Z" % SHORT_MESSAGE_MAX_CHARS),
)

# Messages likely to benefit from memory
TRIGGER_PATTERNS: Tuple[Pattern[str], ...] = (
    # Questions about people
    re.compile(r"\b(who|what|when|where|how)\b.*\b(is|are|was|were|does|do|did)\b", re.IGNORECASE),
    # References to relationships
    re.compile(
        r"\b(my|our|partner'?s?)\s+(mom|dad|mother|father|brother|sister|boss|friend|doctor|dentist)",
        re.IGNORECASE,
    ),
    # Preferences
    re.compile(r"\b(like|love|hate|prefer|favorite|allergic|can't eat|don't eat)", re.IGNORECASE),
    # Memory-related
    re.compile(r"\b(remember|forgot|told you|mentioned|said)\b", re.IGNORECASE),
    # Planning that might need context
    re.compile(r"\b(plan|schedule|book|reserve|arrange)\b", re.IGNORECASE),
    # Dates and events
    re.compile(r"\b(birthday|anniversary|appointment|meeting)\b", re.IGNORECASE),
)

MULTI_TOPIC_PATTERN = re.compile(r"\b(and|also|plus|as well)\b", re.IGNORECASE)


def should_retrieve_memories(message: str) -> bool:
    """
    Decide whether a message is worth a memory lookup.

    Skip patterns win over trigger patterns. Messages matching neither are
    retrieved only when longer than DEFAULT_RETRIEVAL_MIN_CHARS, since
    longer messages are more likely to benefit from context.

    Args:
        message: The incoming user message

    Returns:
        True if memories should be retrieved
    """
    if any(pattern.search(message) for pattern in SKIP_PATTERNS):
        return False

    if any(pattern.search(message) for pattern in TRIGGER_PATTERNS):
        return True

    return len(message) > DEFAULT_RETRIEVAL_MIN_CHARS


def calculate_memory_limit(message: str) -> int:
    """
    Calculate how many memories to retrieve for a message.

    Starts from BASE_MEMORY_LIMIT and adds a bonus for long messages,
    multi-topic conjunctions and questions, capped at MAX_MEMORY_LIMIT.

    Args:
        message: The incoming user message

    Returns:
        Number of memories to request from the store
    """
    limit = BASE_MEMORY_LIMIT

    if len(message.split()) > LONG_MESSAGE_WORD_COUNT:
        limit += LONG_MESSAGE_BONUS
    if MULTI_TOPIC_PATTERN.search(message):
        limit += MULTI_TOPIC_BONUS
    if "?" in message:
        limit += QUESTION_BONUS

    return min(limit, MAX_MEMORY_LIMIT)
