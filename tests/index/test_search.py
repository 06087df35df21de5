"""Tests for hybrid search ranking and the merge policy."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest

from codeseek.index._internal.extraction import ChunkExtractor
from codeseek.index._internal.indexing import HashEmbedder
from codeseek.index.models import ChunkKind, CodeChunk, CodeContext
from codeseek.index.search import HybridSearchEngine, proximity


class _StubEmbedder(HashEmbedder):
    """Embedder returning fixed 2-d vectors by query text or chunk id."""

    def __init__(self, vectors: dict[str, list[float]]) -> None:
        super().__init__(dim=2)
        self._vectors = {key: np.array(value, dtype=np.float64) for key, value in vectors.items()}

    def embed(self, text: str) -> np.ndarray:
        return self._vectors.get(text, np.zeros(2))

    def get_or_embed(self, chunk: CodeChunk) -> np.ndarray:
        return self._vectors[chunk.id]


@pytest.fixture
def stub_embedder() -> _StubEmbedder:
    return _StubEmbedder(
        {
            "q": [1.0, 0.0],
            "a": [1.0, 0.0],  # similarity 1.0
            "b": [0.6, 0.8],  # similarity 0.6
            "c": [0.0, 1.0],  # similarity 0.0
        }
    )


@pytest.fixture
def corpus(make_chunk: Callable[..., CodeChunk]) -> list[CodeChunk]:
    return [
        make_chunk("a", "return 1;", path="/src/a.ts", start_line=1),
        make_chunk("b", "return 2;", path="/src/b.ts", start_line=1),
        make_chunk("c", "return 3;", path="/src/c.ts", start_line=21),
    ]


def _scores(results: list) -> dict[str, float]:
    return {r.id: r.score for r in results}


class TestProximity:
    @pytest.mark.parametrize(
        ("start", "cursor", "expected"),
        [(5, 5, 1.0), (15, 5, 0.5), (0, 10, 0.5), (35, 5, 0.25)],
    )
    def test_halves_every_ten_lines(self, start: int, cursor: int, expected: float) -> None:
        assert proximity(start, cursor) == pytest.approx(expected)


class TestMergePolicy:
    """Exact scores produced by each merge phase."""

    def test_semantic_only_orders_by_similarity(
        self, stub_embedder: _StubEmbedder, corpus: list[CodeChunk]
    ) -> None:
        engine = HybridSearchEngine(stub_embedder)

        results = engine.search("q", corpus)

        assert [r.id for r in results] == ["a", "b", "c"]
        assert [r.score for r in results] == pytest.approx([1.0, 0.6, 0.0])

    def test_keyword_match_raises_score_to_floor(
        self, stub_embedder: _StubEmbedder, make_chunk: Callable[..., CodeChunk]
    ) -> None:
        engine = HybridSearchEngine(stub_embedder)
        corpus = [
            make_chunk("a", "q = 1", path="/src/a.ts"),
            make_chunk("b", "seq()", path="/src/b.ts"),
            make_chunk("c", "return 3;", path="/src/c.ts"),
        ]

        scores = _scores(engine.search("q", corpus))

        assert scores["a"] == pytest.approx(1.0)  # max keeps the higher score
        assert scores["b"] == pytest.approx(0.8)
        assert scores["c"] == pytest.approx(0.0)

    def test_context_bonus_added_to_existing_candidates(
        self, stub_embedder: _StubEmbedder, corpus: list[CodeChunk]
    ) -> None:
        engine = HybridSearchEngine(stub_embedder)
        context = CodeContext(current_file="/src/b.ts", cursor_line=1)

        scores = _scores(engine.search("q", corpus, context))

        assert scores["b"] == pytest.approx(0.8)
        assert scores["a"] == pytest.approx(1.0)

    def test_context_bonus_is_capped(
        self, stub_embedder: _StubEmbedder, corpus: list[CodeChunk]
    ) -> None:
        engine = HybridSearchEngine(stub_embedder)
        context = CodeContext(current_file="/src/a.ts", cursor_line=1)

        scores = _scores(engine.search("q", corpus, context))

        assert scores["a"] == 1.0

    def test_context_only_candidate_scored_by_proximity(
        self, stub_embedder: _StubEmbedder, corpus: list[CodeChunk]
    ) -> None:
        engine = HybridSearchEngine(stub_embedder, semantic_top_k=1)
        context = CodeContext(current_file="/src/c.ts", cursor_line=1)

        results = engine.search("q", corpus, context)

        assert [r.id for r in results] == ["a", "c"]
        assert results[1].score == pytest.approx(proximity(21, 1) * 0.5)

    def test_semantic_top_k_drops_weak_candidates(
        self, stub_embedder: _StubEmbedder, corpus: list[CodeChunk]
    ) -> None:
        engine = HybridSearchEngine(stub_embedder, semantic_top_k=2)

        assert [r.id for r in engine.search("q", corpus)] == ["a", "b"]

    def test_results_carry_chunk_content_and_metadata(
        self, stub_embedder: _StubEmbedder, corpus: list[CodeChunk]
    ) -> None:
        result = HybridSearchEngine(stub_embedder).search("q", corpus)[0]

        assert result.chunk is corpus[0]
        assert result.content == corpus[0].content
        assert result.metadata == corpus[0].metadata


class TestSearch:
    """End-to-end ranking with the hash embedder."""

    @pytest.fixture
    def engine(self) -> HybridSearchEngine:
        return HybridSearchEngine(HashEmbedder())

    def test_empty_corpus_returns_empty(self, engine: HybridSearchEngine) -> None:
        assert engine.search("anything", []) == []

    def test_keyword_match_guarantees_floor(
        self, engine: HybridSearchEngine, greet_ts: str
    ) -> None:
        corpus = ChunkExtractor().extract("/src/greet.ts", greet_ts, "typescript")

        results = engine.search("greet", corpus)

        greet_hits = [
            r
            for r in results
            if r.chunk.kind is ChunkKind.FUNCTION and r.metadata.symbols == ("greet",)
        ]
        assert greet_hits
        assert all(r.score >= 0.8 for r in greet_hits)
        assert results[0].score >= 0.8

    def test_results_sorted_and_bounded(
        self, engine: HybridSearchEngine, make_chunk: Callable[..., CodeChunk]
    ) -> None:
        corpus = [make_chunk(f"c{i}", f"handler number {i}") for i in range(30)]

        results = engine.search("handler", corpus)

        assert len(results) == 10
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert all(0.0 <= s <= 1.0 for s in scores)

    @pytest.mark.parametrize(("limit", "expected"), [(3, 3), (0, 0), (50, 10)])
    def test_limit_is_clamped(
        self,
        engine: HybridSearchEngine,
        make_chunk: Callable[..., CodeChunk],
        limit: int,
        expected: int,
    ) -> None:
        corpus = [make_chunk(f"c{i}", f"handler {i}") for i in range(15)]

        assert len(engine.search("handler", corpus, limit=limit)) == expected

    def test_empty_query_matches_every_chunk_by_keyword(
        self, engine: HybridSearchEngine, make_chunk: Callable[..., CodeChunk]
    ) -> None:
        corpus = [make_chunk("a", "x"), make_chunk("b", "y")]

        results = engine.search("", corpus)

        assert {r.id for r in results} == {"a", "b"}
        assert all(r.score == pytest.approx(0.8) for r in results)


class TestContextualSuggestions:
    @pytest.fixture
    def engine(self) -> HybridSearchEngine:
        return HybridSearchEngine(HashEmbedder())

    def test_blank_cursor_line_yields_nothing(
        self, engine: HybridSearchEngine, make_chunk: Callable[..., CodeChunk]
    ) -> None:
        context = CodeContext(current_file="/src/a.ts", cursor_line=1, current_line="   ")

        assert engine.get_contextual_suggestions([make_chunk("a", "x")], context) == []

    def test_cursor_line_text_is_the_query(
        self, engine: HybridSearchEngine, make_chunk: Callable[..., CodeChunk]
    ) -> None:
        corpus = [
            make_chunk("a", "function debounce() {}", path="/src/a.ts"),
            make_chunk("b", "function other() {}", path="/src/b.ts"),
        ]
        context = CodeContext(
            current_file="/src/b.ts", cursor_line=1, current_line="  debounce  "
        )

        results = engine.get_contextual_suggestions(corpus, context)

        assert results[0].id == "a"
        assert results[0].score >= 0.8
