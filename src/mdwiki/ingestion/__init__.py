"""Loading wiki pages from disk."""
