"""Detection, targeting and application of user corrections."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterator, NamedTuple, Optional, Pattern, Tuple

from loguru import logger

from duet.config.constants import CORRECTION_SIMILARITY_THRESHOLD
from duet.memory.models import (
    CorrectionAction,
    CorrectionResult,
    CorrectionSignal,
    CorrectionStrength,
    Memory,
)

if TYPE_CHECKING:
    from duet.storage.base import MemoryStore


class CorrectionRule(NamedTuple):
    """A phrase that marks a message as a correction."""

    pattern: Pattern[str]
    strength: CorrectionStrength


# Evaluated in order; the first match decides the strength
CORRECTION_PATTERNS: Tuple[CorrectionRule, ...] = (
    CorrectionRule(re.compile(r"\bactually\b", re.IGNORECASE), CorrectionStrength.MEDIUM),
    CorrectionRule(re.compile(r"\bthat's not right\b", re.IGNORECASE), CorrectionStrength.STRONG),
    CorrectionRule(re.compile(r"\bi meant\b", re.IGNORECASE), CorrectionStrength.MEDIUM),
    CorrectionRule(re.compile(r"\bno,?\s+i\b", re.IGNORECASE), CorrectionStrength.MEDIUM),
    CorrectionRule(re.compile(r"\bnot anymore\b", re.IGNORECASE), CorrectionStrength.STRONG),
    CorrectionRule(re.compile(r"\bused to\b.*\bbut\b", re.IGNORECASE), CorrectionStrength.STRONG),
    CorrectionRule(re.compile(r"\bhas changed\b", re.IGNORECASE), CorrectionStrength.STRONG),
    CorrectionRule(re.compile(r"\bforget (that|what i said)\b", re.IGNORECASE), CorrectionStrength.STRONG),
)

# Possessive / identity phrasing that names what is being corrected.
# e.g. "Actually my mom's name is Sarah" -> "mom"
SUBJECT_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\b(my|our)\s+(\w+)(?:'s)?\s+(?:name\s+)?is", re.IGNORECASE),
    re.compile(r"\bi'm\s+(?:not\s+)?(\w+)", re.IGNORECASE),
    re.compile(r"\bi\s+(?:don't|do not)\s+(\w+)", re.IGNORECASE),
)

NOT_A_CORRECTION = CorrectionSignal(is_correction=False, strength=CorrectionStrength.WEAK)


def detect_correction(message: str) -> CorrectionSignal:
    """
    Detect whether a message corrects previously shared information.

    Args:
        message: The incoming user message

    Returns:
        CorrectionSignal with the strength of the first matching rule, or
        a weak non-correction when nothing matches
    """
    for rule in CORRECTION_PATTERNS:
        if rule.pattern.search(message):
            return CorrectionSignal(is_correction=True, strength=rule.strength)
    return NOT_A_CORRECTION


def _subject_from_match(match: re.Match) -> str:
    # Prefer the second group (the noun after "my"/"our") when it exists
    if match.re.groups >= 2 and match.group(2):
        return match.group(2)
    return match.group(1)


def extract_subjects(message: str) -> Iterator[str]:
    """Yield candidate correction subjects in SUBJECT_PATTERNS order."""
    for pattern in SUBJECT_PATTERNS:
        match = pattern.search(message)
        if match:
            yield _subject_from_match(match)


async def find_correction_target(
    store: MemoryStore,
    couple_id: str,
    message: str,
    similarity_threshold: float = CORRECTION_SIMILARITY_THRESHOLD,
) -> Optional[Memory]:
    """
    Find the stored memory a correction most likely refers to.

    Best effort: each extracted subject is looked up in turn and the first
    lookup with any hit wins.

    Args:
        store: Memory store to query
        couple_id: Couple whose memories are searched
        message: The correction message
        similarity_threshold: Minimum similarity passed to the store

    Returns:
        Best-ranked matching memory, or None if no subject matched
    """
    for subject in extract_subjects(message):
        similar = await store.find_similar_memories(couple_id, subject, similarity_threshold)
        if similar:
            logger.debug(f"Correction subject '{subject}' matched memory {similar[0].id}")
            return similar[0]
        logger.debug(f"No memory found for correction subject '{subject}'")

    return None


async def apply_correction(
    store: MemoryStore,
    memory_id: str,
    new_content: Optional[str],
) -> CorrectionResult:
    """
    Apply a correction to an existing memory.

    Args:
        store: Memory store to mutate
        memory_id: ID of the memory being corrected
        new_content: Replacement content, or None to delete the memory

    Returns:
        CorrectionResult; success is False when the memory no longer exists
    """
    if new_content is None:
        deleted = await store.delete_memory(memory_id)
        logger.info(f"Correction deleted memory {memory_id} (success={deleted})")
        return CorrectionResult(success=deleted, action=CorrectionAction.DELETED)

    updated = await store.update_memory(memory_id, new_content)
    logger.info(f"Correction updated memory {memory_id} (success={updated is not None})")
    return CorrectionResult(success=updated is not None, action=CorrectionAction.UPDATED)
