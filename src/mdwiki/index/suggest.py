"""Autocomplete suggestions drawn from titles and tags."""

from __future__ import annotations

from typing import Dict, List

from mdwiki.index.indexer import SearchIndex
from mdwiki.utils.hangul import korean_match

MIN_QUERY_LENGTH = 2


def get_suggestions(index: SearchIndex, query: str, limit: int = 5) -> List[str]:
    """Return matching titles, then matching tags, in first-seen order."""
    if not query.strip() or len(query) < MIN_QUERY_LENGTH:
        return []

    needle = query.lower()
    suggestions: Dict[str, None] = {}

    for doc in index.documents.values():
        if needle in doc.title.lower() or korean_match(doc.title, query):
            suggestions.setdefault(doc.title, None)

    for doc in index.documents.values():
        for tag in doc.tags:
            if needle in tag.lower() or korean_match(tag, query):
                suggestions.setdefault(tag, None)

    return list(suggestions)[: max(limit, 0)]
