"""LanguagePack: single source of truth for tree-sitter config per grammar.

Every grammar codeseek can parse has exactly ONE LanguagePack that
consolidates:
- Grammar install metadata (package, module, version, loader function)
- Node-kind classification into the closed NodeCategory set used by
  chunk extraction

The PACKS registry is the canonical lookup: ``PACKS["typescript"]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeCategory(Enum):
    """Closed set of syntax node categories recognized during extraction."""

    FUNCTION = "function"
    CLASS = "class"
    IMPORT = "import"
    EXPORT = "export"
    OTHER = "other"


@dataclass(frozen=True)
class LanguagePack:
    """Complete tree-sitter configuration for a single grammar."""

    # -- Identity --
    name: str  # Grammar name ("javascript", "typescript", "tsx")

    # -- Grammar install --
    grammar_package: str  # PyPI package ("tree-sitter-typescript")
    grammar_module: str  # Python import ("tree_sitter_typescript")
    min_version: str
    # Non-standard function name (e.g. "language_typescript", "language_tsx")
    language_func: str = "language"

    # -- Node classification (node type -> category) --
    node_categories: dict[str, NodeCategory] = field(default_factory=dict)

    def categorize(self, node_type: str) -> NodeCategory:
        return self.node_categories.get(node_type, NodeCategory.OTHER)


# =========================================================================
# JAVASCRIPT / TYPESCRIPT
# =========================================================================

_JS_CATEGORIES: dict[str, NodeCategory] = {
    "function_declaration": NodeCategory.FUNCTION,
    "generator_function_declaration": NodeCategory.FUNCTION,
    "method_definition": NodeCategory.FUNCTION,
    "arrow_function": NodeCategory.FUNCTION,
    "function_expression": NodeCategory.FUNCTION,
    "generator_function": NodeCategory.FUNCTION,
    "class_declaration": NodeCategory.CLASS,
    "import_statement": NodeCategory.IMPORT,
    "export_statement": NodeCategory.EXPORT,
}

_TS_CATEGORIES: dict[str, NodeCategory] = {
    **_JS_CATEGORIES,
    "abstract_class_declaration": NodeCategory.CLASS,
}

JAVASCRIPT_PACK = LanguagePack(
    name="javascript",
    grammar_package="tree-sitter-javascript",
    grammar_module="tree_sitter_javascript",
    min_version="0.23.0",
    node_categories=_JS_CATEGORIES,
)

TYPESCRIPT_PACK = LanguagePack(
    name="typescript",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    min_version="0.23.0",
    language_func="language_typescript",
    node_categories=_TS_CATEGORIES,
)

TSX_PACK = LanguagePack(
    name="tsx",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    min_version="0.23.0",
    language_func="language_tsx",
    node_categories=_TS_CATEGORIES,
)


_ALL_PACKS: tuple[LanguagePack, ...] = (JAVASCRIPT_PACK, TYPESCRIPT_PACK, TSX_PACK)

PACKS: dict[str, LanguagePack] = {pack.name: pack for pack in _ALL_PACKS}


def get_pack(name: str) -> LanguagePack | None:
    """Get a LanguagePack by grammar name."""
    return PACKS.get(name)
