"""Tree-sitter parsing for chunk extraction.

Grammars are loaded lazily from their PyPI grammar packages
(``tree_sitter_javascript``, ``tree_sitter_typescript``) using the
LanguagePack metadata. A grammar whose package is not importable is
reported as unavailable; callers degrade to whole-file chunks.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from typing import Any

import structlog
import tree_sitter

from codeseek.index._internal.parsing.packs import LanguagePack, get_pack

log = structlog.get_logger()


@dataclass
class ParseResult:
    """Result of parsing a file."""

    grammar: str
    pack: LanguagePack
    error_count: int
    root_node: Any  # Tree-sitter Node


@dataclass
class TreeSitterParser:
    """
    Tree-sitter parser shared by all files of an indexing run.

    Usage::

        parser = TreeSitterParser()
        if parser.is_available("typescript"):
            result = parser.parse(source_bytes, "typescript")
    """

    _parser: Any = field(default=None, repr=False)
    _languages: dict[str, Any] = field(default_factory=dict, repr=False)
    _unavailable: set[str] = field(default_factory=set, repr=False)

    def __post_init__(self) -> None:
        self._parser = tree_sitter.Parser()

    def _get_language(self, grammar: str) -> Any:
        """Get or load a Tree-sitter language.

        Raises:
            ValueError: If no pack exists or its grammar module cannot be loaded.
        """
        if grammar in self._languages:
            return self._languages[grammar]
        if grammar in self._unavailable:
            raise ValueError(f"Language not available: {grammar}")

        pack = get_pack(grammar)
        if pack is None:
            self._unavailable.add(grammar)
            raise ValueError(f"Language not available: {grammar}")

        try:
            mod = importlib.import_module(pack.grammar_module)
            lang_fn = getattr(mod, pack.language_func)
            lang = tree_sitter.Language(lang_fn())
        except (ImportError, AttributeError) as err:
            self._unavailable.add(grammar)
            log.warning(
                "parsing.grammar_unavailable",
                grammar=grammar,
                package=pack.grammar_package,
                error=str(err),
            )
            raise ValueError(f"Language not available: {grammar}") from err

        self._languages[grammar] = lang
        return lang

    def is_available(self, grammar: str) -> bool:
        """True when the grammar's package can be loaded."""
        try:
            self._get_language(grammar)
        except ValueError:
            return False
        return True

    def parse(self, content: bytes, grammar: str) -> ParseResult:
        """
        Parse source bytes with Tree-sitter.

        Args:
            content: File content as UTF-8 bytes
            grammar: Grammar name registered in PACKS

        Returns:
            ParseResult with the root node and error info.

        Raises:
            ValueError: If the grammar is not available.
        """
        ts_lang = self._get_language(grammar)
        pack = get_pack(grammar)
        assert pack is not None  # _get_language succeeded

        self._parser.language = ts_lang
        tree = self._parser.parse(content)

        error_count = 0
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                error_count += 1
            stack.extend(node.children)

        return ParseResult(
            grammar=grammar,
            pack=pack,
            error_count=error_count,
            root_node=tree.root_node,
        )
