"""Data model for the chunk index.

Architecture:
- FileNode: read-only snapshot of a workspace tree handed to an indexing run
- CodeChunk: a line-bounded excerpt of one file, tagged with a structural kind
- SearchResult: a ranked chunk returned by hybrid search
- IndexingStatus: progress/error snapshot of the current (or last) run

Chunk ids are generated fresh on every extraction. They are NOT stable
across indexing runs: an id obtained before a reindex is invalid afterwards,
so callers must not cache ids across runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np
import numpy.typing as npt

Vector = npt.NDArray[np.float64]


# ============================================================================
# ENUMS
# ============================================================================


class NodeType(str, Enum):
    """Kind of a workspace tree node."""

    FILE = "file"
    DIRECTORY = "directory"


class ChunkKind(str, Enum):
    """Structural kind of a chunk."""

    FUNCTION = "function"
    CLASS = "class"
    MODULE = "module"
    OTHER = "other"


# ============================================================================
# WORKSPACE TREE
# ============================================================================


@dataclass(frozen=True)
class FileNode:
    """One node of a workspace file tree.

    ``path`` is slash-delimited and unique; the root is ``/``. Directory
    children are ordered directories first, then by name.
    """

    path: str
    type: NodeType
    name: str = ""
    language: str | None = None
    children: tuple[FileNode, ...] = ()

    @property
    def is_file(self) -> bool:
        return self.type is NodeType.FILE

    @property
    def is_directory(self) -> bool:
        return self.type is NodeType.DIRECTORY

    @classmethod
    def file(cls, path: str, language: str | None = None) -> FileNode:
        return cls(path=path, type=NodeType.FILE, name=path.rsplit("/", 1)[-1], language=language)

    @classmethod
    def directory(cls, path: str, children: list[FileNode] | tuple[FileNode, ...] = ()) -> FileNode:
        name = path.rstrip("/").rsplit("/", 1)[-1] if path != "/" else ""
        return cls(path=path, type=NodeType.DIRECTORY, name=name, children=tuple(children))


# ============================================================================
# CHUNKS
# ============================================================================


@dataclass(frozen=True)
class ChunkMetadata:
    """Location and symbol facts for a chunk. Lines are 1-indexed, inclusive."""

    file_name: str
    file_path: str
    start_line: int
    end_line: int
    language: str
    symbols: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()  # Raw statement text, module chunks only
    exports: tuple[str, ...] = ()  # Raw statement text, module chunks only
    last_modified: float = 0.0  # Epoch seconds at extraction time


@dataclass(eq=False)
class CodeChunk:
    """A contiguous excerpt of one file's source.

    ``content`` and ``metadata`` never change after extraction. ``embedding``
    is absent until the embedder populates it.
    """

    id: str
    content: str
    kind: ChunkKind
    metadata: ChunkMetadata
    embedding: Vector | None = field(default=None, repr=False)


@dataclass
class SearchResult:
    """A chunk ranked by hybrid search. ``score`` is in [0, 1]."""

    id: str
    chunk: CodeChunk
    score: float
    content: str
    metadata: ChunkMetadata

    @classmethod
    def from_chunk(cls, chunk: CodeChunk, score: float) -> SearchResult:
        return cls(
            id=chunk.id,
            chunk=chunk,
            score=score,
            content=chunk.content,
            metadata=chunk.metadata,
        )


# ============================================================================
# QUERY CONTEXT / STATUS
# ============================================================================


@dataclass(frozen=True)
class CodeContext:
    """Editor cursor context supplied with a search."""

    current_file: str
    cursor_line: int
    cursor_column: int = 1
    current_line: str = ""
    language: str | None = None


@dataclass(frozen=True)
class IndexingErrorRecord:
    """A file that failed to fetch or parse during a run."""

    file: str
    message: str


@dataclass
class IndexingStatus:
    """Snapshot of indexing progress and per-file errors."""

    is_indexing: bool = False
    progress: int = 0
    total_files: int = 0
    indexed_files: int = 0
    errors: list[IndexingErrorRecord] = field(default_factory=list)
    total_chunks: int = 0

    def snapshot(self) -> IndexingStatus:
        """Independent copy safe to hand to callers."""
        return replace(self, errors=list(self.errors))
