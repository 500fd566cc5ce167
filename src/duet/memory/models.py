"""Core memory data structures."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4


class MemoryCategory(Enum):
    """Presentation grouping for memories."""
    FACT = "fact"                  # Personal facts and preferences
    RELATIONSHIP = "relationship"  # People and connections
    CONTEXT = "context"            # Ongoing situations


class Visibility(Enum):
    """Scope of a conversation thread."""
    SHARED = "shared"  # Both partners
    DM = "dm"          # One partner's private thread


class CorrectionStrength(Enum):
    """Heuristic confidence that a message is a correction."""
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"


class CorrectionAction(Enum):
    """What applying a correction did to the stored memory."""
    UPDATED = "updated"
    DELETED = "deleted"


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@dataclass
class Memory:
    """A durable fact the assistant knows about a couple."""

    id: str = field(default_factory=lambda: str(uuid4()))
    couple_id: str = ""
    content: str = ""
    category: MemoryCategory = MemoryCategory.FACT

    # Provenance (user_id None = couple-level memory)
    user_id: Optional[str] = None
    source_thread_id: Optional[str] = None
    source_visibility: Optional[Visibility] = None

    # Temporal info
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    last_accessed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "couple_id": self.couple_id,
            "content": self.content,
            "category": self.category.value,
            "user_id": self.user_id,
            "source_thread_id": self.source_thread_id,
            "source_visibility": self.source_visibility.value if self.source_visibility else None,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "last_accessed_at": self.last_accessed_at.isoformat() if self.last_accessed_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Memory":
        """Reconstruct from dictionary."""
        now = datetime.now()
        source_visibility = data.get("source_visibility")
        return cls(
            id=data["id"],
            couple_id=data["couple_id"],
            content=data["content"],
            category=MemoryCategory(data.get("category", "fact")),
            user_id=data.get("user_id"),
            source_thread_id=data.get("source_thread_id"),
            source_visibility=Visibility(source_visibility) if source_visibility else None,
            created_at=_parse_datetime(data.get("created_at")) or now,
            updated_at=_parse_datetime(data.get("updated_at")) or now,
            last_accessed_at=_parse_datetime(data.get("last_accessed_at")),
        )


@dataclass
class MemorySearchResult(Memory):
    """A memory annotated by the store for one requester.

    Stores return these in descending relevance; that order is
    authoritative and is never re-sorted downstream.
    """

    relevance_score: float = 0.0
    from_partner: bool = False

    @classmethod
    def from_memory(
        cls,
        memory: Memory,
        relevance_score: float,
        from_partner: bool,
    ) -> "MemorySearchResult":
        """Annotate a stored memory with search metadata."""
        return cls(
            id=memory.id,
            couple_id=memory.couple_id,
            content=memory.content,
            category=memory.category,
            user_id=memory.user_id,
            source_thread_id=memory.source_thread_id,
            source_visibility=memory.source_visibility,
            created_at=memory.created_at,
            updated_at=memory.updated_at,
            last_accessed_at=memory.last_accessed_at,
            relevance_score=relevance_score,
            from_partner=from_partner,
        )


@dataclass(frozen=True)
class SessionContext:
    """Identity and scope of the message being handled."""

    couple_id: str
    user_id: str
    visibility: Visibility = Visibility.SHARED
    user_name: str = ""
    partner_name: Optional[str] = None
    couple_name: Optional[str] = None
    thread_id: Optional[str] = None


@dataclass(frozen=True)
class CorrectionSignal:
    """Result of correction detection for a single message."""

    is_correction: bool
    strength: CorrectionStrength = CorrectionStrength.WEAK


@dataclass(frozen=True)
class CorrectionResult:
    """Outcome of applying a correction to a stored memory."""

    success: bool
    action: CorrectionAction
