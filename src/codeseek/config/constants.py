"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
They define the embedding contract and the hybrid merge policy; changing any of
them changes observable ranking behavior.

For configurable values, see models.py (LimitsConfig, IndexConfig, etc.).
"""

# =============================================================================
# Embedding
# =============================================================================

EMBEDDING_DIM = 128
"""Length of every embedding vector."""

EMBED_PREVIEW_CHARS = 500
"""Characters of chunk content included in the chunk's embedding text."""

HASH_MULTIPLIER = 31
"""Polynomial rolling hash multiplier for token bucketing."""

# =============================================================================
# Hybrid Search Merge
# =============================================================================

SEARCH_MAX_LIMIT = 10
"""Hard cap on results returned by a single search."""

SEMANTIC_TOP_K_DEFAULT = 20
"""Semantic candidates kept before merging."""

KEYWORD_MATCH_SCORE = 0.8
"""Score floor assigned to keyword matches."""

CONTEXT_WEIGHT = 0.5
"""Multiplier applied to cursor proximity for context-only candidates."""

CONTEXT_BONUS = 0.2
"""Bonus added to an existing candidate found in the cursor's file."""

PROXIMITY_LINE_SCALE = 10
"""Line distance at which proximity halves."""

MAX_SCORE = 1.0
"""Upper bound of merged scores."""

# =============================================================================
# Indexing
# =============================================================================

PROGRESS_COMPLETE = 100
"""Percent reported when a run finishes."""

ANONYMOUS_SYMBOL = "anonymous"
"""Symbol recorded for function/class nodes without a name field."""
