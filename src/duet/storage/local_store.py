"""In-process memory store with BM25 keyword ranking."""

from __future__ import annotations

import json
import re
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple, Union

from loguru import logger
from rank_bm25 import BM25Okapi

from duet.config.constants import DEFAULT_SIMILARITY_THRESHOLD
from duet.memory.models import Memory, MemorySearchResult, Visibility
from duet.memory.privacy import is_from_partner, is_memory_visible
from duet.storage.base import MemoryStore
from duet.utils.exceptions import MemoryStoreError

if TYPE_CHECKING:
    from duet.config.settings import StorageSettings


class LocalMemoryStore(MemoryStore):
    """
    Memory store kept in process, optionally backed by a JSON file.

    Ranking uses term coverage (the fraction of query tokens a memory
    contains) with BM25 scores breaking ties. Only memories sharing at
    least one token with the query are returned. Intended for development,
    tests and the command line; production deployments plug in their own
    MemoryStore.
    """

    # Common English stop words to filter from BM25 indexing
    _STOP_WORDS = frozenset([
        "a", "an", "and", "are", "as", "at", "be", "been", "being", "but", "by",
        "can", "could", "did", "do", "does", "doing", "done", "for", "from",
        "had", "has", "have", "having", "he", "her", "here", "hers", "him",
        "his", "how", "i", "if", "in", "into", "is", "it", "its", "just",
        "me", "might", "more", "most", "must", "my", "no", "nor", "not", "of",
        "on", "or", "our", "ours", "out", "own", "same", "she", "should", "so",
        "some", "such", "than", "that", "the", "their", "theirs", "them", "then",
        "there", "these", "they", "this", "those", "through", "to", "too", "under",
        "up", "very", "was", "we", "were", "what", "when", "where", "which",
        "while", "who", "whom", "why", "will", "with", "would", "you", "your",
        "yours", "yourself", "yourselves",
    ])

    def __init__(self, settings: Optional[StorageSettings] = None):
        """
        Initialize an empty store.

        Args:
            settings: StorageSettings instance (provides defaults)
        """
        if settings is None:
            from duet.config.settings import StorageSettings
            settings = StorageSettings()

        self.settings = settings
        self._memories: Dict[str, Memory] = {}

    # -------------------------------------------------------------------------
    # Local management (not part of MemoryStore)
    # -------------------------------------------------------------------------

    def add_memory(self, memory: Memory) -> None:
        """Add or replace a memory."""
        self._memories[memory.id] = memory
        logger.debug(f"Added memory {memory.id} for couple {memory.couple_id}")

    def get_memory(self, memory_id: str) -> Optional[Memory]:
        """Get a memory by ID."""
        return self._memories.get(memory_id)

    def list_memories(self, couple_id: str) -> List[Memory]:
        """All memories of a couple, newest first."""
        memories = [m for m in self._memories.values() if m.couple_id == couple_id]
        return sorted(memories, key=lambda m: m.created_at, reverse=True)

    def __len__(self) -> int:
        return len(self._memories)

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        settings: Optional[StorageSettings] = None,
    ) -> LocalMemoryStore:
        """
        Create a store from a JSON file written by save().

        A missing file yields an empty store.

        Raises:
            MemoryStoreError: If the file cannot be read or parsed
        """
        store = cls(settings=settings)
        path = Path(path)
        if not path.exists():
            logger.info(f"No memories file at {path}, starting empty")
            return store

        try:
            data = json.loads(path.read_text())
            for item in data["memories"]:
                store.add_memory(Memory.from_dict(item))
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise MemoryStoreError(f"Failed to load memories from {path}: {e}") from e

        logger.info(f"Loaded {len(store)} memories from {path}")
        return store

    def save(self, path: Union[str, Path]) -> None:
        """
        Write all memories to a JSON file.

        Raises:
            MemoryStoreError: If the file cannot be written
        """
        path = Path(path)
        data = {"memories": [m.to_dict() for m in self._memories.values()]}
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            raise MemoryStoreError(f"Failed to save memories to {path}: {e}") from e

        logger.info(f"Saved {len(self)} memories to {path}")

    # -------------------------------------------------------------------------
    # MemoryStore interface
    # -------------------------------------------------------------------------

    async def search_memories(
        self,
        couple_id: str,
        user_id: str,
        query: str,
        visibility: Visibility,
        limit: int,
    ) -> List[MemorySearchResult]:
        couple_memories = [m for m in self._memories.values() if m.couple_id == couple_id]
        ranked = self._rank(query, couple_memories)

        now = datetime.now()
        results: List[MemorySearchResult] = []
        for memory, coverage in ranked:
            if not is_memory_visible(memory, user_id, visibility):
                continue
            memory.last_accessed_at = now
            results.append(
                MemorySearchResult.from_memory(
                    memory,
                    relevance_score=coverage,
                    from_partner=is_from_partner(memory, user_id),
                )
            )
            if len(results) >= limit:
                break

        logger.debug(f"Search returned {len(results)} memories for couple {couple_id}")
        return results

    async def find_similar_memories(
        self,
        couple_id: str,
        content: str,
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    ) -> List[Memory]:
        couple_memories = [m for m in self._memories.values() if m.couple_id == couple_id]
        ranked = self._rank(content, couple_memories)

        similar = [replace(memory) for memory, coverage in ranked if coverage >= threshold]
        return similar[: self.settings.similar_results]

    async def update_memory(self, memory_id: str, content: str) -> Optional[Memory]:
        memory = self._memories.get(memory_id)
        if memory is None:
            logger.warning(f"Memory {memory_id} not found for update")
            return None

        memory.content = content
        memory.updated_at = datetime.now()
        logger.debug(f"Updated memory {memory_id}")
        return replace(memory)

    async def delete_memory(self, memory_id: str) -> bool:
        if self._memories.pop(memory_id, None) is None:
            logger.warning(f"Memory {memory_id} not found for delete")
            return False

        logger.debug(f"Deleted memory {memory_id}")
        return True

    # -------------------------------------------------------------------------
    # Ranking
    # -------------------------------------------------------------------------

    def _tokenize(self, text: str) -> List[str]:
        """Lowercase word tokens without stop words or single characters."""
        tokens = re.findall(r"\w+", text.lower())
        return [t for t in tokens if t not in self._STOP_WORDS and len(t) > 1]

    def _rank(self, query: str, memories: List[Memory]) -> List[Tuple[Memory, float]]:
        """
        Rank memories against a query.

        Returns:
            (memory, coverage) pairs for memories sharing at least one
            query token, ordered by coverage then BM25 score
        """
        query_tokens = self._tokenize(query)
        if not query_tokens or not memories:
            return []

        corpus = [self._tokenize(m.content) for m in memories]
        if not any(corpus):
            return []

        scores = BM25Okapi(corpus).get_scores(query_tokens)
        unique_query = set(query_tokens)

        scored: List[Tuple[Memory, float, float]] = []
        for memory, tokens, score in zip(memories, corpus, scores):
            matched = unique_query.intersection(tokens)
            if not matched:
                continue
            coverage = len(matched) / len(unique_query)
            scored.append((memory, coverage, float(score)))

        scored.sort(key=lambda item: (item[1], item[2]), reverse=True)
        return [(memory, coverage) for memory, coverage, _score in scored]
