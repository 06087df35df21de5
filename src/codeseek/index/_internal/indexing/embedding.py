"""Deterministic hashed bag-of-words embeddings.

This is a stand-in vectorizer, not a trained model: text is lowercased and
split on whitespace, every token is hashed with a 32-bit polynomial rolling
hash into one of EMBEDDING_DIM buckets, bucket counts are L2-normalized.
Identical text always yields an identical vector.

Lifecycle (owned by one IndexCoordinator):
  - embed_chunks()  -> embed every chunk of a finished walk
  - get_or_embed()  -> cached vector, embedding on demand when missing
  - clear()         -> drop all cached vectors at the start of a run
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
import structlog

from codeseek.config.constants import EMBED_PREVIEW_CHARS, EMBEDDING_DIM, HASH_MULTIPLIER
from codeseek.index.models import CodeChunk, Vector

log = structlog.get_logger()

_U32_MASK = 0xFFFFFFFF
_I32_SIGN = 0x80000000


def token_hash(token: str) -> int:
    """Polynomial rolling hash ``h = h*31 + ord(ch)`` wrapped to signed 32 bits."""
    h = 0
    for ch in token:
        h = (h * HASH_MULTIPLIER + ord(ch)) & _U32_MASK
    return h - (1 << 32) if h & _I32_SIGN else h


def chunk_text(chunk: CodeChunk) -> str:
    """Text representation embedded for a chunk."""
    return "\n".join(
        [
            chunk.metadata.file_name,
            " ".join(chunk.metadata.symbols),
            chunk.content[:EMBED_PREVIEW_CHARS],
        ]
    )


class HashEmbedder:
    """Embeds text and chunks; caches chunk vectors by chunk id."""

    def __init__(self, dim: int = EMBEDDING_DIM) -> None:
        self.dim = dim
        self._cache: dict[str, Vector] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, chunk_id: object) -> bool:
        return chunk_id in self._cache

    def embed(self, text: str) -> Vector:
        """Embed text into a unit-length vector (zero vector for empty text)."""
        vector = np.zeros(self.dim, dtype=np.float64)
        for token in text.lower().split():
            vector[abs(token_hash(token)) % self.dim] += 1.0

        norm = np.linalg.norm(vector)
        if norm > 0:
            vector /= norm
        return vector

    @staticmethod
    def similarity(a: Vector, b: Vector) -> float:
        """Cosine similarity in [-1, 1]; 0 for zero vectors or mismatched shapes."""
        if a.shape != b.shape:
            return 0.0
        norm_a = np.linalg.norm(a)
        norm_b = np.linalg.norm(b)
        if norm_a == 0 or norm_b == 0:
            return 0.0
        return float(np.dot(a, b) / (norm_a * norm_b))

    def embed_chunk(self, chunk: CodeChunk) -> Vector:
        """Embed a chunk, cache it by id and attach it to the chunk."""
        vector = self.embed(chunk_text(chunk))
        self._cache[chunk.id] = vector
        chunk.embedding = vector
        return vector

    def get_or_embed(self, chunk: CodeChunk) -> Vector:
        cached = self._cache.get(chunk.id)
        if cached is not None:
            return cached
        return self.embed_chunk(chunk)

    def embed_chunks(self, chunks: Iterable[CodeChunk]) -> int:
        """Embed chunks sequentially, reusing cached vectors.

        Returns:
            Number of chunks newly embedded.
        """
        embedded = 0
        for chunk in chunks:
            if chunk.id in self._cache:
                continue
            self.embed_chunk(chunk)
            embedded += 1
        log.debug("embedding.batch_done", embedded=embedded, cached=len(self._cache))
        return embedded

    def get(self, chunk_id: str) -> Vector | None:
        return self._cache.get(chunk_id)

    def clear(self) -> None:
        """Drop all cached embeddings."""
        self._cache.clear()
