"""Tokenization strategies and the per-field inverted index."""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Iterator, List, Set

_HANGUL = r"\u1100-\u11ff\u3130-\u318f\ua960-\ua97f\uac00-\ud7af\ud7b0-\ud7ff"
# A Hangul run and a neighbouring run of other word characters are separate tokens.
_TOKEN = re.compile(rf"[{_HANGUL}]+|[^\W_{_HANGUL}]+")


class TokenizeStrategy(str, Enum):
    """How a token is expanded into index keys."""

    FORWARD = "forward"
    EXACT = "exact"
    SUBSTRING = "substring"


def tokenize(text: str) -> List[str]:
    """Lowercase ``text`` and split it into word tokens."""
    if not text:
        return []
    return _TOKEN.findall(text.lower())


def expand_token(token: str, strategy: TokenizeStrategy) -> Iterator[str]:
    """Yield the index keys a single token contributes under ``strategy``."""
    if strategy is TokenizeStrategy.EXACT:
        yield token
    elif strategy is TokenizeStrategy.FORWARD:
        for end in range(1, len(token) + 1):
            yield token[:end]
    else:
        for start in range(len(token)):
            for end in range(start + 1, len(token) + 1):
                yield token[start:end]


class FieldIndex:
    """Token -> document id mapping for one document field.

    A query matches a document when every query term is a key pointing at it.
    """

    __slots__ = ("strategy", "_postings")

    def __init__(self, strategy: TokenizeStrategy = TokenizeStrategy.FORWARD) -> None:
        self.strategy = TokenizeStrategy(strategy)
        self._postings: Dict[str, Set[int]] = {}

    def add(self, doc_id: int, text: str) -> None:
        for token in tokenize(text):
            for key in expand_token(token, self.strategy):
                self._postings.setdefault(key, set()).add(doc_id)

    def search(self, query: str, *, limit: int = 100) -> List[int]:
        """Return matching ids in ascending order, at most ``limit`` of them."""
        terms = tokenize(query)
        if not terms or limit <= 0:
            return []

        matched: Set[int] | None = None
        for term in dict.fromkeys(terms):
            postings = self._postings.get(term)
            if not postings:
                return []
            matched = set(postings) if matched is None else matched & postings
            if not matched:
                return []

        return sorted(matched or ())[:limit]

    def doc_ids(self) -> Set[int]:
        ids: Set[int] = set()
        for postings in self._postings.values():
            ids.update(postings)
        return ids

    def __contains__(self, token: object) -> bool:
        return token in self._postings

    def __len__(self) -> int:
        return len(self._postings)
