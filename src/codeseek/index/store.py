"""In-memory chunk registry for one coordinator.

Purely transient: rebuilt from scratch by every indexing run. Iteration
order is insertion order but carries no meaning for consumers.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from codeseek.index.models import CodeChunk


def matches_text(chunk: CodeChunk, needle: str) -> bool:
    """Case-insensitive substring match on content, file name, or any symbol."""
    needle = needle.lower()
    return (
        needle in chunk.content.lower()
        or needle in chunk.metadata.file_name.lower()
        or any(needle in symbol.lower() for symbol in chunk.metadata.symbols)
    )


class IndexStore:
    """Chunks keyed by id."""

    def __init__(self) -> None:
        self._chunks: dict[str, CodeChunk] = {}

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[CodeChunk]:
        return iter(list(self._chunks.values()))

    def insert(self, chunk: CodeChunk) -> None:
        self._chunks[chunk.id] = chunk

    def insert_many(self, chunks: Iterable[CodeChunk]) -> None:
        for chunk in chunks:
            self.insert(chunk)

    def get(self, chunk_id: str) -> CodeChunk | None:
        return self._chunks.get(chunk_id)

    def all(self) -> list[CodeChunk]:
        return list(self._chunks.values())

    def find_by_text(self, needle: str) -> list[CodeChunk]:
        """Linear scan for keyword matches (see matches_text)."""
        return [chunk for chunk in self._chunks.values() if matches_text(chunk, needle)]

    def clear(self) -> None:
        self._chunks.clear()
