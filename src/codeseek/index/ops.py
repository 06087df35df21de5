"""High-level orchestration of the chunk index.

This module implements the IndexCoordinator - the entry point for all index
operations. It owns the IndexStore, the embedder (and its cache) and the
search engine; nothing is shared through module-level state, so independent
coordinators never see each other's chunks.

Run pipeline (sequential, one file at a time):
    count eligible -> clear store/cache -> walk (fetch -> extract -> insert
    -> progress) -> embed all chunks -> report 100%

SERIALIZATION:
- Only ONE indexing run per coordinator at a time. A second
  index_workspace() while a run is active is rejected with
  IndexingError(INDEX_RUN_IN_PROGRESS); the active run is unaffected.
"""

from __future__ import annotations

import asyncio
import math
import time
from collections.abc import Callable, Iterator
from typing import Protocol, runtime_checkable

import structlog

from codeseek.config.constants import PROGRESS_COMPLETE
from codeseek.config.models import CodeSeekConfig
from codeseek.core.errors import FetchError, IndexingError
from codeseek.core.languages import is_supported
from codeseek.core.logging import clear_run_id, set_run_id
from codeseek.index._internal.extraction import ChunkExtractor
from codeseek.index._internal.indexing import HashEmbedder
from codeseek.index.models import (
    CodeChunk,
    CodeContext,
    FileNode,
    IndexingErrorRecord,
    IndexingStatus,
    SearchResult,
)
from codeseek.index.search import HybridSearchEngine
from codeseek.index.store import IndexStore

log = structlog.get_logger()

ProgressCallback = Callable[[int, int, int], None]
"""on_progress(percent, indexed_files, total_files)"""

ErrorCallback = Callable[[str, str], None]
"""on_indexing_error(file, message)"""


@runtime_checkable
class ContentProvider(Protocol):
    """Source of the workspace tree and file contents.

    get_file_content() raises FetchError when the path does not exist or
    cannot be read.
    """

    def get_file_tree(self) -> FileNode: ...

    async def get_file_content(self, path: str) -> str: ...


def is_eligible(node: FileNode) -> bool:
    """Files whose declared language has a grammar are indexed."""
    return node.is_file and is_supported(node.language)


def iter_eligible_files(root: FileNode) -> Iterator[FileNode]:
    """Depth-first walk in tree order yielding eligible files."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_directory:
            stack.extend(reversed(node.children))
        elif is_eligible(node):
            yield node


def count_eligible_files(root: FileNode) -> int:
    return sum(1 for _ in iter_eligible_files(root))


def _percent(done: int, total: int) -> int:
    """Rounded percentage, halves rounded up."""
    if total <= 0:
        return 0
    return min(PROGRESS_COMPLETE, math.floor(done * 100 / total + 0.5))


class IndexCoordinator:
    """
    Indexing and query entry point.

    Usage::

        coordinator = IndexCoordinator(LocalWorkspace(root))
        await coordinator.reindex(on_progress=print)

        results = coordinator.search("debounce")
        status = coordinator.get_indexing_status()
    """

    def __init__(
        self,
        provider: ContentProvider,
        *,
        config: CodeSeekConfig | None = None,
        extractor: ChunkExtractor | None = None,
        embedder: HashEmbedder | None = None,
        store: IndexStore | None = None,
    ) -> None:
        self._provider = provider
        self._config = config or CodeSeekConfig()
        self._extractor = extractor or ChunkExtractor()
        self._embedder = embedder or HashEmbedder()
        self._store = store or IndexStore()
        self._engine = HybridSearchEngine(
            self._embedder,
            semantic_top_k=self._config.limits.semantic_candidates,
            max_results=self._config.limits.search_default,
        )
        self._status = IndexingStatus()
        self._run_lock = asyncio.Lock()

    @property
    def is_indexing(self) -> bool:
        return self._run_lock.locked()

    async def reindex(
        self,
        on_progress: ProgressCallback | None = None,
        on_indexing_error: ErrorCallback | None = None,
    ) -> IndexingStatus:
        """Fetch the provider's current tree and run a full index over it."""
        return await self.index_workspace(
            self._provider.get_file_tree(),
            on_progress=on_progress,
            on_indexing_error=on_indexing_error,
        )

    async def index_workspace(
        self,
        file_tree: FileNode,
        on_progress: ProgressCallback | None = None,
        on_indexing_error: ErrorCallback | None = None,
    ) -> IndexingStatus:
        """Rebuild the index from a file-tree snapshot.

        Per-file fetch/extraction failures are recorded and skipped; the run
        always completes with a final ``on_progress(100, ...)``.

        Returns:
            Status snapshot at the end of the run.

        Raises:
            IndexingError: If another run on this coordinator is active.
        """
        if self._run_lock.locked():
            log.warning("indexing.rejected", reason="run_in_progress")
            raise IndexingError.run_in_progress()

        async with self._run_lock:
            set_run_id()
            try:
                return await self._run(file_tree, on_progress, on_indexing_error)
            finally:
                clear_run_id()

    async def _run(
        self,
        file_tree: FileNode,
        on_progress: ProgressCallback | None,
        on_indexing_error: ErrorCallback | None,
    ) -> IndexingStatus:
        start_time = time.monotonic()
        total = count_eligible_files(file_tree)

        self._store.clear()
        self._embedder.clear()
        status = self._status = IndexingStatus(is_indexing=True, total_files=total)
        log.info("indexing.started", total_files=total)

        try:
            for node in iter_eligible_files(file_tree):
                assert node.language is not None  # guaranteed by is_eligible
                try:
                    content = await self._provider.get_file_content(node.path)
                    chunks = self._extractor.extract(node.path, content, node.language)
                except FetchError as exc:
                    self._record_error(node.path, exc.message, on_indexing_error)
                    continue
                except Exception as exc:  # noqa: BLE001
                    log.error("indexing.file_crashed", path=node.path, exc_info=True)
                    self._record_error(node.path, str(exc) or type(exc).__name__, on_indexing_error)
                    continue

                self._store.insert_many(chunks)
                status.indexed_files += 1
                status.total_chunks = len(self._store)
                status.progress = max(status.progress, _percent(status.indexed_files, total))
                if on_progress is not None:
                    on_progress(status.progress, status.indexed_files, total)

            embedded = self._embedder.embed_chunks(self._store.all())

            status.progress = PROGRESS_COMPLETE
            status.total_chunks = len(self._store)
            if on_progress is not None:
                on_progress(PROGRESS_COMPLETE, status.indexed_files, total)
        finally:
            status.is_indexing = False

        log.info(
            "indexing.completed",
            total_files=total,
            indexed_files=status.indexed_files,
            failed_files=len(status.errors),
            chunks=status.total_chunks,
            embedded=embedded,
            duration_seconds=round(time.monotonic() - start_time, 3),
        )
        return status.snapshot()

    def _record_error(
        self, path: str, message: str, on_indexing_error: ErrorCallback | None
    ) -> None:
        log.warning("indexing.file_failed", path=path, error=message)
        self._status.errors.append(IndexingErrorRecord(file=path, message=message))
        if on_indexing_error is not None:
            on_indexing_error(path, message)

    def search(
        self,
        query: str,
        context: CodeContext | None = None,
        *,
        limit: int | None = None,
    ) -> list[SearchResult]:
        """Hybrid search over the current index."""
        return self._engine.search(query, self._store.all(), context, limit=limit)

    def get_contextual_suggestions(self, context: CodeContext) -> list[SearchResult]:
        """Suggestions for the text under the cursor."""
        return self._engine.get_contextual_suggestions(self._store.all(), context)

    def get_indexing_status(self) -> IndexingStatus:
        """Snapshot of the current (or last) run."""
        snapshot = self._status.snapshot()
        snapshot.total_chunks = len(self._store)
        return snapshot

    def get_chunks(self) -> list[CodeChunk]:
        return self._store.all()
