"""Memory retrieval and correction for Duet.

Two independent pipelines share the incoming message:
- Retrieval: should_retrieve_memories -> calculate_memory_limit ->
  get_memories_for_context -> build_memory_context
- Correction: detect_correction -> find_correction_target ->
  (agent decides) -> apply_correction
"""

from duet.memory.ambiguity import AmbiguityCheck, detect_ambiguity
from duet.memory.context import build_memory_context
from duet.memory.corrections import (
    apply_correction,
    detect_correction,
    extract_subjects,
    find_correction_target,
)
from duet.memory.retrieval import get_memories_for_context
from duet.memory.triggers import calculate_memory_limit, should_retrieve_memories

__all__ = [
    # Retrieval pipeline
    "should_retrieve_memories",
    "calculate_memory_limit",
    "get_memories_for_context",
    "build_memory_context",
    # Correction pipeline
    "detect_correction",
    "extract_subjects",
    "find_correction_target",
    "apply_correction",
    # Ambiguity
    "AmbiguityCheck",
    "detect_ambiguity",
]
