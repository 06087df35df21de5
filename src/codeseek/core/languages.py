"""Canonical language definitions.

This module defines the authoritative mapping of:
- File extensions -> declared language names (what a FileNode carries)
- Declared language names -> tree-sitter grammar names

Design decisions:
1. Declared names follow the workspace file API: ``.jsx`` files are declared
   ``javascript`` and ``.tsx`` files ``typescript``. The aliases ``jsx`` and
   ``tsx`` are still accepted as declared names.
2. Grammar is None when structural parsing is not offered for a language.
   Such files may appear in a file tree but are never indexed.
3. ``typescript`` files with a ``.tsx`` suffix are parsed with the TSX grammar
   so JSX bodies do not degrade to ERROR nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

PLAINTEXT = "plaintext"


@dataclass(frozen=True, slots=True)
class Language:
    """Canonical definition for a declared language name.

    Attributes:
        name: Unique identifier (lowercase, e.g., "typescript")
        extensions: File extensions without dot (e.g., "ts", "tsx")
        grammar: Tree-sitter grammar name, or None if not structurally indexed
    """

    name: str
    extensions: frozenset[str]
    grammar: str | None = None


# RULES:
# 1. Extensions are lowercase without the leading dot
# 2. Grammar must be a grammar name registered in the parsing packs, or None

ALL_LANGUAGES: tuple[Language, ...] = (
    Language("javascript", frozenset({"js", "jsx", "mjs", "cjs"}), grammar="javascript"),
    Language("typescript", frozenset({"ts", "tsx", "mts", "cts"}), grammar="typescript"),
    Language("markdown", frozenset({"md"})),
    Language("json", frozenset({"json"})),
    Language("css", frozenset({"css"})),
    Language("html", frozenset({"html"})),
    Language("python", frozenset({"py"})),
    Language("java", frozenset({"java"})),
    Language("cpp", frozenset({"cpp"})),
    Language("c", frozenset({"c"})),
    Language("go", frozenset({"go"})),
    Language("rust", frozenset({"rs"})),
)

LANGUAGES_BY_NAME: dict[str, Language] = {lang.name: lang for lang in ALL_LANGUAGES}

EXTENSION_TO_NAME: dict[str, str] = {
    ext: lang.name for lang in ALL_LANGUAGES for ext in lang.extensions
}

# Declared-name aliases that resolve to a grammar of their own
_ALIAS_GRAMMARS: dict[str, str] = {
    "jsx": "javascript",
    "tsx": "tsx",
}

SUPPORTED_LANGUAGES: frozenset[str] = frozenset(
    {lang.name for lang in ALL_LANGUAGES if lang.grammar is not None} | set(_ALIAS_GRAMMARS)
)
"""Declared language names eligible for indexing."""


def detect_language(path: str | PurePosixPath) -> str:
    """Declared language for a file path, ``plaintext`` when unknown."""
    ext = PurePosixPath(path).suffix.lower().lstrip(".")
    return EXTENSION_TO_NAME.get(ext, PLAINTEXT)


def is_supported(language: str | None) -> bool:
    """True when files declared with ``language`` are indexed."""
    return language is not None and language.lower() in SUPPORTED_LANGUAGES


def get_grammar_name(language: str, path: str | None = None) -> str | None:
    """Tree-sitter grammar for a declared language, or None.

    ``path`` refines the choice for TypeScript: ``.tsx`` files use the TSX
    grammar.
    """
    key = language.lower()
    if key in _ALIAS_GRAMMARS:
        return _ALIAS_GRAMMARS[key]
    lang = LANGUAGES_BY_NAME.get(key)
    if lang is None or lang.grammar is None:
        return None
    if lang.grammar == "typescript" and path and path.lower().endswith(".tsx"):
        return "tsx"
    return lang.grammar
