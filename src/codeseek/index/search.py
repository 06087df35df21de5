"""Hybrid search: semantic + keyword + cursor-context signals.

Three candidate sets are computed independently and merged in a fixed
order, which decides tie-break precedence:

1. Semantic: top-K chunks by cosine similarity to the query, score =
   similarity.
2. Keyword: case-insensitive substring matches. An existing candidate is
   raised to at least KEYWORD_MATCH_SCORE; a new one enters with it.
3. Context: chunks of the cursor's file, scored by line proximity times
   CONTEXT_WEIGHT. An existing candidate gains CONTEXT_BONUS (capped at
   MAX_SCORE); a new one enters with its own score.

Merged candidates are stably sorted by descending score and truncated.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from codeseek.config.constants import (
    CONTEXT_BONUS,
    CONTEXT_WEIGHT,
    KEYWORD_MATCH_SCORE,
    MAX_SCORE,
    PROXIMITY_LINE_SCALE,
    SEARCH_MAX_LIMIT,
    SEMANTIC_TOP_K_DEFAULT,
)
from codeseek.index._internal.indexing import HashEmbedder
from codeseek.index.models import CodeChunk, CodeContext, SearchResult
from codeseek.index.store import matches_text

log = structlog.get_logger()


def proximity(start_line: int, cursor_line: int) -> float:
    """1 at the cursor line, halving every PROXIMITY_LINE_SCALE lines."""
    return 1.0 / (1.0 + abs(start_line - cursor_line) / PROXIMITY_LINE_SCALE)


def _ranked(results: list[SearchResult]) -> list[SearchResult]:
    return sorted(results, key=lambda r: r.score, reverse=True)


class HybridSearchEngine:
    """Ranks a chunk corpus against a query.

    The engine holds no chunks itself; the corpus is passed per call and the
    embedder (with its cache) is shared with the owning coordinator.
    """

    def __init__(
        self,
        embedder: HashEmbedder,
        *,
        semantic_top_k: int = SEMANTIC_TOP_K_DEFAULT,
        max_results: int = SEARCH_MAX_LIMIT,
    ) -> None:
        self._embedder = embedder
        self.semantic_top_k = semantic_top_k
        self.max_results = min(max_results, SEARCH_MAX_LIMIT)

    def semantic_candidates(self, query: str, corpus: Sequence[CodeChunk]) -> list[SearchResult]:
        query_vec = self._embedder.embed(query)
        scored = [
            SearchResult.from_chunk(
                chunk, self._embedder.similarity(query_vec, self._embedder.get_or_embed(chunk))
            )
            for chunk in corpus
        ]
        return _ranked(scored)[: self.semantic_top_k]

    @staticmethod
    def keyword_candidates(query: str, corpus: Sequence[CodeChunk]) -> list[CodeChunk]:
        return [chunk for chunk in corpus if matches_text(chunk, query)]

    @staticmethod
    def context_candidates(
        context: CodeContext, corpus: Sequence[CodeChunk]
    ) -> list[SearchResult]:
        return [
            SearchResult.from_chunk(
                chunk,
                proximity(chunk.metadata.start_line, context.cursor_line) * CONTEXT_WEIGHT,
            )
            for chunk in corpus
            if chunk.metadata.file_path == context.current_file
        ]

    def search(
        self,
        query: str,
        corpus: Sequence[CodeChunk],
        context: CodeContext | None = None,
        *,
        limit: int | None = None,
    ) -> list[SearchResult]:
        """Rank ``corpus`` against ``query``.

        Args:
            query: Free-text query
            corpus: Chunks to search
            context: Optional cursor context adding proximity signals
            limit: Max results (defaults to, and never exceeds, max_results)

        Returns:
            Results sorted by descending score. Empty corpus yields [].
        """
        if not corpus:
            return []

        limit = self.max_results if limit is None else max(0, min(limit, self.max_results))

        merged: dict[str, SearchResult] = {}

        for result in self.semantic_candidates(query, corpus):
            merged[result.id] = result

        keyword_hits = self.keyword_candidates(query, corpus)
        for chunk in keyword_hits:
            existing = merged.get(chunk.id)
            if existing is not None:
                existing.score = max(existing.score, KEYWORD_MATCH_SCORE)
            else:
                merged[chunk.id] = SearchResult.from_chunk(chunk, KEYWORD_MATCH_SCORE)

        context_hits: list[SearchResult] = []
        if context is not None:
            context_hits = self.context_candidates(context, corpus)
            for result in context_hits:
                existing = merged.get(result.id)
                if existing is not None:
                    existing.score = min(MAX_SCORE, existing.score + CONTEXT_BONUS)
                else:
                    merged[result.id] = result

        results = _ranked(list(merged.values()))[:limit]
        log.debug(
            "search.completed",
            query=query,
            corpus=len(corpus),
            keyword_hits=len(keyword_hits),
            context_hits=len(context_hits),
            returned=len(results),
        )
        return results

    def get_contextual_suggestions(
        self, corpus: Sequence[CodeChunk], context: CodeContext
    ) -> list[SearchResult]:
        """Search using the trimmed text of the cursor line as the query."""
        query = context.current_line.strip()
        if not query:
            return []
        return self.search(query, corpus, context)
