"""Structural chunk extraction.

Splits one file into function and class chunks using tree-sitter. Files the
parser cannot handle (no grammar, grammar package missing, parser failure)
and files without any function/class node yield exactly one ``module`` chunk
spanning the whole file. Extraction never raises for malformed source.

Chunks come out of a single pre-order walk, so they are in source order and
a class precedes its own methods. The store keeps this order, and it breaks
score ties in search.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any

import structlog

from codeseek.config.constants import ANONYMOUS_SYMBOL
from codeseek.core.languages import get_grammar_name
from codeseek.index._internal.parsing import NodeCategory, ParseResult, TreeSitterParser
from codeseek.index.models import ChunkKind, ChunkMetadata, CodeChunk

log = structlog.get_logger()


def _new_chunk_id() -> str:
    return uuid.uuid4().hex


def _file_name(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def _node_text(node: Any, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


@dataclass
class _Walk:
    """Facts collected from one traversal of a syntax tree."""

    structural: list[tuple[Any, ChunkKind]] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)


class ChunkExtractor:
    """Turns a file's source into CodeChunks.

    Usage::

        extractor = ChunkExtractor()
        chunks = extractor.extract("/src/greet.ts", content, "typescript")
    """

    def __init__(self, parser: TreeSitterParser | None = None) -> None:
        self._parser = parser or TreeSitterParser()

    def extract(self, path: str, content: str, language: str) -> list[CodeChunk]:
        """Extract chunks from one file.

        Args:
            path: Slash-delimited workspace path of the file
            content: Full source text
            language: Declared language of the file

        Returns:
            Function/class chunks in source order, or a single module chunk.
        """
        lines = content.split("\n")
        grammar = get_grammar_name(language, path)
        if grammar is None or not self._parser.is_available(grammar):
            log.debug("extraction.fallback", path=path, language=language, reason="no_grammar")
            return [self._module_chunk(path, content, lines, language)]

        try:
            source = content.encode("utf-8")
            result = self._parser.parse(source, grammar)
            walk = self._walk(result)
        except Exception:  # noqa: BLE001
            log.warning("extraction.parse_failed", path=path, grammar=grammar, exc_info=True)
            return [self._module_chunk(path, content, lines, language)]

        if result.error_count:
            log.debug("extraction.syntax_errors", path=path, errors=result.error_count)

        if not walk.structural:
            return [
                self._module_chunk(
                    path,
                    content,
                    lines,
                    language,
                    imports=[_node_text(n, source) for n in walk.imports],
                    exports=[_node_text(n, source) for n in walk.exports],
                )
            ]

        return [
            self._node_chunk(node, kind, path, lines, source, language)
            for node, kind in walk.structural
        ]

    def _walk(self, result: ParseResult) -> _Walk:
        """Depth-first pre-order traversal classifying every node."""
        walk = _Walk()
        pack = result.pack
        stack: list[Any] = [result.root_node]
        while stack:
            node = stack.pop()
            # Keyword tokens share type names with real nodes
            category = pack.categorize(node.type) if node.is_named else NodeCategory.OTHER
            match category:
                case NodeCategory.FUNCTION:
                    walk.structural.append((node, ChunkKind.FUNCTION))
                case NodeCategory.CLASS:
                    walk.structural.append((node, ChunkKind.CLASS))
                case NodeCategory.IMPORT:
                    walk.imports.append(node)
                case NodeCategory.EXPORT:
                    walk.exports.append(node)
                case NodeCategory.OTHER:
                    pass
            # Reversed so children pop in source order
            stack.extend(reversed(node.children))
        return walk

    def _node_chunk(
        self,
        node: Any,
        kind: ChunkKind,
        path: str,
        lines: list[str],
        source: bytes,
        language: str,
    ) -> CodeChunk:
        start_line = node.start_point[0] + 1
        end_line = max(node.end_point[0] + 1, start_line)
        name_node = node.child_by_field_name("name")
        symbol = _node_text(name_node, source) if name_node is not None else ANONYMOUS_SYMBOL

        return CodeChunk(
            id=_new_chunk_id(),
            content="\n".join(lines[start_line - 1 : end_line]),
            kind=kind,
            metadata=ChunkMetadata(
                file_name=_file_name(path),
                file_path=path,
                start_line=start_line,
                end_line=end_line,
                language=language,
                symbols=(symbol,),
                last_modified=time.time(),
            ),
        )

    def _module_chunk(
        self,
        path: str,
        content: str,
        lines: list[str],
        language: str,
        *,
        imports: list[str] | None = None,
        exports: list[str] | None = None,
    ) -> CodeChunk:
        return CodeChunk(
            id=_new_chunk_id(),
            content=content,
            kind=ChunkKind.MODULE,
            metadata=ChunkMetadata(
                file_name=_file_name(path),
                file_path=path,
                start_line=1,
                end_line=len(lines),
                language=language,
                imports=tuple(imports or ()),
                exports=tuple(exports or ()),
                last_modified=time.time(),
            ),
        )
