"""Fixed parameters for memory retrieval and correction.

These values shape externally visible behaviour (result bounds, message
length cut-offs) and are not meant to be tuned per deployment.
"""

# Adaptive retrieval limit
BASE_MEMORY_LIMIT = 5
"""Number of memories fetched for a plain message."""

MAX_MEMORY_LIMIT = 15
"""Upper bound on memories fetched for any message."""

LONG_MESSAGE_WORD_COUNT = 20
"""Messages with more words than this get LONG_MESSAGE_BONUS."""

LONG_MESSAGE_BONUS = 3
MULTI_TOPIC_BONUS = 3
QUESTION_BONUS = 2

# Trigger classifier length cut-offs
SHORT_MESSAGE_MAX_CHARS = 10
"""Messages this short (or shorter) never trigger retrieval."""

DEFAULT_RETRIEVAL_MIN_CHARS = 50
"""Unmatched messages longer than this still trigger retrieval."""

# Correction target resolution
CORRECTION_SIMILARITY_THRESHOLD = 0.5
"""Minimum similarity for a stored memory to count as a correction target."""

DEFAULT_SIMILARITY_THRESHOLD = 0.7
"""Default threshold for similarity lookups outside correction handling."""

SIMILAR_RESULTS_LIMIT = 5
"""Maximum candidates returned by a similarity lookup."""
