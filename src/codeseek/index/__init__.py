"""Chunk index and hybrid code search.

Public API:
- IndexCoordinator: indexing runs, search, status
- ContentProvider: protocol an indexing run fetches file contents through
- IndexStore / HybridSearchEngine: building blocks used by the coordinator
"""

from codeseek.index.models import (
    ChunkKind,
    ChunkMetadata,
    CodeChunk,
    CodeContext,
    FileNode,
    IndexingErrorRecord,
    IndexingStatus,
    NodeType,
    SearchResult,
)
from codeseek.index.ops import ContentProvider, IndexCoordinator
from codeseek.index.search import HybridSearchEngine
from codeseek.index.store import IndexStore

__all__ = [
    "ChunkKind",
    "ChunkMetadata",
    "CodeChunk",
    "CodeContext",
    "ContentProvider",
    "FileNode",
    "HybridSearchEngine",
    "IndexCoordinator",
    "IndexStore",
    "IndexingErrorRecord",
    "IndexingStatus",
    "NodeType",
    "SearchResult",
]
