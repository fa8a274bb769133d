"""Ranked, Korean-aware search over a :class:`SearchIndex`."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Set

from mdwiki.index.holder import IndexHolder
from mdwiki.index.indexer import SearchIndex
from mdwiki.index.suggest import get_suggestions
from mdwiki.utils.hangul import (
    HangulError,
    chosung_includes,
    contains_korean,
    disassemble,
    get_choseong,
    is_chosung_only,
    korean_match,
)

LOGGER = logging.getLogger(__name__)

ELLIPSIS = "..."


@dataclass(slots=True)
class SearchResult:
    slug: str
    title: str
    path: str
    excerpt: str
    score: int


@dataclass(slots=True, frozen=True)
class SearchOptions:
    limit: int = 20
    fuzzy: bool = True
    threshold: float = 0.3


class _ScoreBoard:
    """Accumulates raw scores and the fields that produced them."""

    __slots__ = ("scores", "fields")

    def __init__(self) -> None:
        self.scores: Dict[int, float] = {}
        self.fields: Dict[int, Set[str]] = {}

    def add(self, doc_id: int, weight: float, field_name: str) -> None:
        self.scores[doc_id] = self.scores.get(doc_id, 0.0) + weight
        self.fields.setdefault(doc_id, set()).add(field_name)

    def __bool__(self) -> bool:
        return bool(self.scores)


def normalize_korean_query(query: str) -> List[str]:
    """Return the query plus its jamo and chosung rewrites, de-duplicated.

    A chosung-only query is returned as is; it is handled by the Korean
    matching pass rather than by the token indices.
    """
    variants = [query]
    if is_chosung_only(query):
        return variants

    if contains_korean(query):
        try:
            disassembled = disassemble(query)
            if disassembled != query:
                variants.append(disassembled)
            chosung = get_choseong(query)
            if chosung and chosung != query:
                variants.append(chosung)
        except HangulError as exc:
            LOGGER.debug("Query rewrite skipped for %r: %s", query, exc)

    return list(dict.fromkeys(variants))


def calculate_similarity(first: str, second: str) -> float:
    """Character-set overlap between two strings, in ``[0, 1]``."""
    s1 = first.lower()
    s2 = second.lower()

    if s1 == s2:
        return 1.0
    if s1 in s2 or s2 in s1:
        return 0.9

    chars1 = set(s1)
    chars2 = set(s2)
    return len(chars1 & chars2) / max(len(chars1), len(chars2))


def _find_match(content: str, query: str) -> int:
    index = content.lower().find(query.lower())

    if index == -1 and is_chosung_only(query):
        for word in content.split():
            try:
                if chosung_includes(word, query):
                    index = content.find(word)
                    break
            except HangulError:
                continue

    if index == -1 and contains_korean(query):
        try:
            needle = disassemble(query).lower()
            for word in content.split():
                if needle in disassemble(word).lower():
                    index = content.find(word)
                    break
        except HangulError as exc:
            LOGGER.debug("Excerpt jamo scan skipped: %s", exc)

    return index


def extract_excerpt(content: str, query: str, max_length: int = 150) -> str:
    """Cut a window of ``content`` around the first match of ``query``.

    The window never exceeds ``max_length`` characters; edges are moved to
    word boundaries when that keeps the match inside, and ``...`` marks
    truncation on either side.
    """
    match_index = _find_match(content, query)

    if match_index == -1:
        suffix = ELLIPSIS if len(content) > max_length else ""
        return content[:max_length] + suffix

    half = max_length // 2
    start = max(0, match_index - half)
    end = min(len(content), match_index + len(query) + half, start + max_length)

    if start > 0:
        space = content.find(" ", start)
        if space != -1 and space < match_index:
            start = space + 1

    if end < len(content):
        space = content.rfind(" ", 0, end + 1)
        if space != -1 and space > match_index:
            end = space

    excerpt = content[start:end]
    if start > 0:
        excerpt = ELLIPSIS + excerpt
    if end < len(content):
        excerpt = excerpt + ELLIPSIS
    return excerpt


def _normalize_score(raw: float, max_score: float) -> int:
    # Half-up rounding, not Python's round-half-even.
    return int(math.floor(min(100.0, raw / max_score * 100) + 0.5))


def search(
    index: SearchIndex, query: str, options: SearchOptions | None = None
) -> List[SearchResult]:
    """Rank indexed documents against ``query``.

    Never raises for odd input: a blank query or no match yields ``[]``.
    """
    options = options or SearchOptions()
    query = query.strip()
    if not query:
        return []

    config = index.config
    weights = config.weights
    board = _ScoreBoard()

    for variant in normalize_korean_query(query):
        for field_name, field_index in index.fields():
            limit = config.probe_limits.for_field(field_name)
            weight = weights.for_field(field_name)
            for doc_id in field_index.search(variant, limit=limit):
                board.add(doc_id, weight, field_name)

    if contains_korean(query) or is_chosung_only(query):
        factor = config.korean_weight_factor
        for doc_id, doc in index.documents.items():
            if korean_match(doc.title, query):
                board.add(doc_id, weights.title * factor, "title")
            if any(korean_match(tag, query) for tag in doc.tags):
                board.add(doc_id, weights.tags * factor, "tags")
            if any(korean_match(heading, query) for heading in doc.headings):
                board.add(doc_id, weights.headings * factor, "headings")
            if korean_match(doc.plain_content[: config.korean_content_limit], query):
                board.add(doc_id, weights.content * factor, "content")

    if options.fuzzy and not board:
        for doc_id, doc in index.documents.items():
            similarity = calculate_similarity(doc.title, query)
            if similarity >= options.threshold:
                board.add(doc_id, weights.title * similarity, "title")

    results: List[SearchResult] = []
    for doc_id, raw in board.scores.items():
        doc = index.documents.get(doc_id)
        if doc is None or raw <= 0:
            continue
        results.append(
            SearchResult(
                slug=doc.slug,
                title=doc.title,
                path=doc.path,
                excerpt=extract_excerpt(doc.plain_content, query, config.excerpt_length),
                score=_normalize_score(raw, config.max_score),
            )
        )

    results.sort(key=lambda result: (-result.score, result.slug))
    LOGGER.debug("Query %r matched %d documents", query, len(results))
    return results[: max(options.limit, 0)]


class Searcher:
    """High-level API over the index currently held by an :class:`IndexHolder`."""

    def __init__(self, holder: IndexHolder) -> None:
        self.holder = holder

    def search(
        self,
        query: str,
        *,
        limit: int = 20,
        fuzzy: bool = True,
        threshold: float = 0.3,
    ) -> List[SearchResult]:
        options = SearchOptions(limit=limit, fuzzy=fuzzy, threshold=threshold)
        return search(self.holder.current, query, options)

    def suggest(self, query: str, *, limit: int = 5) -> List[str]:
        return get_suggestions(self.holder.current, query, limit=limit)
