"""Tree-sitter parsing layer."""

from codeseek.index._internal.parsing.packs import (
    PACKS,
    LanguagePack,
    NodeCategory,
    get_pack,
)
from codeseek.index._internal.parsing.treesitter import ParseResult, TreeSitterParser

__all__ = [
    "PACKS",
    "LanguagePack",
    "NodeCategory",
    "ParseResult",
    "TreeSitterParser",
    "get_pack",
]
