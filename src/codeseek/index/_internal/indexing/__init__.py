"""Embedding layer."""

from codeseek.index._internal.indexing.embedding import HashEmbedder, chunk_text, token_hash

__all__ = ["HashEmbedder", "chunk_text", "token_hash"]
