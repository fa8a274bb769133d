"""In-memory search index, query engine and suggestions."""
