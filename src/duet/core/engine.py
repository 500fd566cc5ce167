"""Memory engine coordinating retrieval and correction for an agent loop."""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from duet.config.settings import Settings
from duet.memory.ambiguity import AmbiguityCheck, detect_ambiguity
from duet.memory.context import build_memory_context
from duet.memory.corrections import (
    apply_correction,
    detect_correction,
    find_correction_target,
)
from duet.memory.instructions import memory_instructions
from duet.memory.models import (
    CorrectionResult,
    CorrectionSignal,
    Memory,
    SessionContext,
)
from duet.memory.retrieval import get_memories_for_context
from duet.memory.triggers import should_retrieve_memories
from duet.storage.base import MemoryStore


@dataclass(frozen=True)
class CorrectionCheck:
    """Correction signal for a message plus the memory it likely targets."""

    signal: CorrectionSignal
    target: Optional[Memory] = None


class MemoryEngine:
    """
    Runs the memory pipelines for each incoming message.

    Provides methods for:
    - Building the memory block of the system prompt (retrieval pipeline)
    - Detecting corrections and resolving their target memory
    - Applying the correction the agent decided on
    - Flagging ambiguous possessives in shared threads

    The engine holds no per-message state, so one instance can serve
    concurrent messages. Store failures are not caught here.
    """

    def __init__(
        self,
        store: MemoryStore,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the memory engine.

        Args:
            store: Memory store used by both pipelines
            settings: Configuration (loaded from env/TOML if None)
        """
        self.store = store
        self.settings = settings or Settings()

    async def retrieve_context(self, session: SessionContext, message: str) -> str:
        """
        Build the memory context block for a message.

        Args:
            session: Identity and visibility of the current message
            message: The incoming user message

        Returns:
            Formatted memories, or "" when retrieval is skipped or finds nothing
        """
        if not self.settings.retrieval.enabled:
            return ""

        if not should_retrieve_memories(message):
            logger.debug("Skipping memory retrieval for message")
            return ""

        memories = await get_memories_for_context(self.store, session, message)
        if not memories:
            logger.debug("No relevant memories found")
            return ""

        logger.debug(f"Retrieved {len(memories)} relevant memories")
        return build_memory_context(memories)

    async def check_correction(self, session: SessionContext, message: str) -> CorrectionCheck:
        """
        Detect a correction and find the memory it most likely refers to.

        Args:
            session: Identity and visibility of the current message
            message: The incoming user message

        Returns:
            CorrectionCheck; target is None for non-corrections or when no
            stored memory matches
        """
        signal = detect_correction(message)
        if not signal.is_correction:
            return CorrectionCheck(signal=signal)

        logger.debug(f"Detected {signal.strength.value} correction")
        target = await find_correction_target(
            self.store,
            session.couple_id,
            message,
            similarity_threshold=self.settings.correction.similarity_threshold,
        )
        return CorrectionCheck(signal=signal, target=target)

    async def apply_correction(
        self,
        memory_id: str,
        new_content: Optional[str],
    ) -> CorrectionResult:
        """
        Update (new_content) or delete (None) a corrected memory.

        Args:
            memory_id: ID of the memory returned by check_correction
            new_content: Replacement content, or None to delete

        Returns:
            CorrectionResult with success and the action taken
        """
        return await apply_correction(self.store, memory_id, new_content)

    def check_ambiguity(self, session: SessionContext, message: str) -> AmbiguityCheck:
        """Flag "my X" references that could mean either partner."""
        return detect_ambiguity(message, session)

    @property
    def instructions(self) -> str:
        """System prompt instructions for conflicts and ambiguous references."""
        return memory_instructions()
