"""Shared fixtures for index tests: sample sources and an in-memory provider."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from codeseek.core.errors import FetchError
from codeseek.core.languages import detect_language
from codeseek.index.models import ChunkKind, ChunkMetadata, CodeChunk, FileNode

GREET_TS = """\
import { format } from "./format";

export function greet(name: string): string {
  return format(`Hello, ${name}`);
}

export class Greeter {
  constructor(private readonly prefix: string) {}

  greet(name: string): string {
    return `${this.prefix} ${name}`;
  }
}
"""

UTILS_JS = """\
const debounce = (fn, wait) => {
  let timer;
  return (...args) => {
    clearTimeout(timer);
    timer = setTimeout(() => fn(...args), wait);
  };
};

function throttle(fn, limit) {
  let waiting = false;
  return function () {
    if (!waiting) {
      fn.apply(this, arguments);
      waiting = true;
    }
  };
}

module.exports = { debounce, throttle };
"""

TYPES_TS = """\
import type { User } from "./user";

export interface Session {
  user: User;
  expiresAt: number;
}

export type SessionId = string;
"""

BUTTON_TSX = """\
export function Button({ label }: { label: string }) {
  return <button className="btn">{label}</button>;
}
"""


class FakeProvider:
    """ContentProvider backed by a dict of path -> content.

    Paths listed in ``failing`` raise FetchError.unreadable. Every fetch is
    recorded in ``fetched``.
    """

    def __init__(
        self,
        files: dict[str, str],
        *,
        failing: set[str] | None = None,
        on_fetch: Callable[[str], object] | None = None,
    ) -> None:
        self.files = files
        self.failing = failing or set()
        self.fetched: list[str] = []
        self._on_fetch = on_fetch

    def get_file_tree(self) -> FileNode:
        return tree_for(self.files)

    async def get_file_content(self, path: str) -> str:
        self.fetched.append(path)
        if self._on_fetch is not None:
            result = self._on_fetch(path)
            if hasattr(result, "__await__"):
                await result  # type: ignore[misc]
        if path in self.failing:
            raise FetchError.unreadable(path, "disk on fire")
        if path not in self.files:
            raise FetchError.not_found(path)
        return self.files[path]


def tree_for(files: dict[str, str], languages: dict[str, str] | None = None) -> FileNode:
    """Build a two-level tree: ``/`` holding a ``/src`` directory of files.

    Files keep their dict order; language comes from ``languages`` or the
    extension.
    """
    languages = languages or {}
    children = tuple(
        FileNode.file(path, languages.get(path, detect_language(path))) for path in files
    )
    return FileNode.directory("/", [FileNode.directory("/src", children)])


@pytest.fixture
def sample_files() -> dict[str, str]:
    return {
        "/src/greet.ts": GREET_TS,
        "/src/utils.js": UTILS_JS,
        "/src/types.ts": TYPES_TS,
        "/src/README.md": "# Greeter\n\nSays hello.\n",
    }


@pytest.fixture
def provider_factory() -> type[FakeProvider]:
    """The FakeProvider class, for tests that build their own file sets."""
    return FakeProvider


@pytest.fixture
def make_tree() -> Callable[..., FileNode]:
    return tree_for


@pytest.fixture
def greet_ts() -> str:
    return GREET_TS


@pytest.fixture
def utils_js() -> str:
    return UTILS_JS


@pytest.fixture
def types_ts() -> str:
    return TYPES_TS


@pytest.fixture
def button_tsx() -> str:
    return BUTTON_TSX


def build_chunk(
    chunk_id: str,
    content: str,
    *,
    path: str = "/src/a.ts",
    symbols: tuple[str, ...] = (),
    start_line: int = 1,
    end_line: int | None = None,
    kind: ChunkKind = ChunkKind.FUNCTION,
) -> CodeChunk:
    return CodeChunk(
        id=chunk_id,
        content=content,
        kind=kind,
        metadata=ChunkMetadata(
            file_name=path.rsplit("/", 1)[-1],
            file_path=path,
            start_line=start_line,
            end_line=end_line if end_line is not None else start_line,
            language="typescript",
            symbols=symbols,
        ),
    )


@pytest.fixture
def make_chunk() -> Callable[..., CodeChunk]:
    """Build a CodeChunk with sensible defaults."""
    return build_chunk
