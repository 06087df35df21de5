"""Local workspace - file tree snapshots and content fetches off a directory.

Pure filesystem I/O. No index dependency; IndexCoordinator consumes it
through the ContentProvider protocol.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from codeseek.config.models import CodeSeekConfig
from codeseek.core.errors import FetchError
from codeseek.core.languages import detect_language
from codeseek.index.models import FileNode, NodeType

log = structlog.get_logger()


def validate_path_in_workspace(root: Path, user_path: str) -> Path:
    """Resolve a tree path against ``root``, preventing traversal.

    Tree paths are ``/``-rooted (``/src/a.ts``); the leading slash is
    relative to the workspace, not the filesystem.

    Raises:
        FetchError(FETCH_OUTSIDE_WORKSPACE): If the path escapes root
    """
    resolved_root = root.resolve()
    full_path = (resolved_root / user_path.lstrip("/")).resolve()

    if not full_path.is_relative_to(resolved_root):
        raise FetchError.outside_workspace(user_path, str(resolved_root))

    return full_path


class LocalWorkspace:
    """ContentProvider over a directory on disk."""

    def __init__(self, root: Path | str, *, config: CodeSeekConfig | None = None) -> None:
        self._root = Path(root)
        config = config or CodeSeekConfig()
        self._excluded = frozenset(config.index.excluded_dirs)
        self._include_hidden = config.index.include_hidden

    @property
    def root(self) -> Path:
        return self._root

    def _skip(self, entry: Path) -> bool:
        if not self._include_hidden and entry.name.startswith("."):
            return True
        return entry.is_dir() and entry.name in self._excluded

    def get_file_tree(self) -> FileNode:
        """Snapshot of the workspace, directories first then by name."""
        tree = self._build(self._root, "")
        log.debug("workspace.tree_built", root=str(self._root))
        return tree

    def _build(self, path: Path, rel: str) -> FileNode:
        tree_path = f"/{rel}" if rel else "/"

        if not path.is_dir():
            return FileNode(
                path=tree_path,
                type=NodeType.FILE,
                name=path.name,
                language=detect_language(path.name),
            )

        try:
            entries = list(path.iterdir())
        except OSError as exc:
            log.warning("workspace.list_failed", path=tree_path, error=str(exc))
            entries = []

        children = [
            self._build(entry, f"{rel}/{entry.name}" if rel else entry.name)
            for entry in entries
            if not self._skip(entry)
        ]
        children.sort(key=lambda n: (not n.is_directory, n.name.lower(), n.name))
        return FileNode(
            path=tree_path,
            type=NodeType.DIRECTORY,
            name=path.resolve().name,
            children=tuple(children),
        )

    async def get_file_content(self, path: str) -> str:
        """Read a file as UTF-8 text without blocking the event loop.

        Raises:
            FetchError: If the path escapes the workspace, is missing, or
                cannot be read
        """
        full_path = validate_path_in_workspace(self._root, path)
        return await asyncio.to_thread(self._read, full_path, path)

    @staticmethod
    def _read(full_path: Path, path: str) -> str:
        if not full_path.is_file():
            raise FetchError.not_found(path)
        try:
            return full_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise FetchError.unreadable(path, str(exc)) from exc
