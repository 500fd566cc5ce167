"""Detection of possessive references that are ambiguous in shared threads."""

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

from duet.memory.models import SessionContext, Visibility


@dataclass(frozen=True)
class AmbiguityCheck:
    """Whether a message needs a "whose X?" clarification."""

    is_ambiguous: bool
    subject: Optional[str] = None
    clarification_prompt: Optional[str] = None


AMBIGUOUS_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(
        r"\bmy\s+(mom|dad|mother|father|brother|sister|boss|friend|doctor|dentist|therapist)",
        re.IGNORECASE,
    ),
    re.compile(r"\bmy\s+(\w+)'s\s+(name|birthday|number|address)", re.IGNORECASE),
)

NOT_AMBIGUOUS = AmbiguityCheck(is_ambiguous=False)


def detect_ambiguity(message: str, session: SessionContext) -> AmbiguityCheck:
    """
    Detect possessive references that could mean either partner.

    "My mom" is only ambiguous in a shared thread, where both partners
    are speaking to the assistant.

    Args:
        message: The incoming user message
        session: Identity and visibility of the current message

    Returns:
        AmbiguityCheck with the subject and a clarification question
    """
    if session.visibility != Visibility.SHARED:
        return NOT_AMBIGUOUS

    for pattern in AMBIGUOUS_PATTERNS:
        match = pattern.search(message)
        if match:
            subject = match.group(1)
            partner_name = session.partner_name or "your partner"
            return AmbiguityCheck(
                is_ambiguous=True,
                subject=subject,
                clarification_prompt=(
                    f"Just to be sure - do you mean your {subject} or {partner_name}'s {subject}?"
                ),
            )

    return NOT_AMBIGUOUS
