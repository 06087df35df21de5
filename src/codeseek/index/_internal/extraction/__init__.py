"""Chunk extraction from source files."""

from codeseek.index._internal.extraction.chunker import ChunkExtractor

__all__ = ["ChunkExtractor"]
