"""Internal implementation of the chunk index. Not a public API."""
