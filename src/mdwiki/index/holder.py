"""Keeps the current search index and swaps it on rebuild."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Sequence

from mdwiki.config import SearchConfig
from mdwiki.index.indexer import SearchIndex, create_search_index
from mdwiki.models import Document

LOGGER = logging.getLogger(__name__)

DocumentSource = Callable[[], Sequence[Document]]


class IndexHolder:
    """Owns the index reference used by the query path.

    Readers take ``current`` once per query; a rebuild assigns a complete new
    index, so a query already running keeps using the index it started with.
    """

    def __init__(self, source: DocumentSource, config: SearchConfig | None = None) -> None:
        self._source = source
        self._config = config or SearchConfig()
        self._index: SearchIndex | None = None
        self._lock = threading.Lock()

    @property
    def current(self) -> SearchIndex:
        index = self._index
        if index is None:
            index = self._ensure_built()
        return index

    @property
    def is_built(self) -> bool:
        return self._index is not None

    def _ensure_built(self) -> SearchIndex:
        with self._lock:
            # Another caller may have built it while we waited
            if self._index is None:
                self._index = self._build()
            return self._index

    def _build(self) -> SearchIndex:
        index = create_search_index(list(self._source()), self._config)
        LOGGER.info("Search index built: %d documents", len(index.documents))
        return index

    def rebuild(self) -> SearchIndex:
        """Build from the source and swap the new index in."""
        with self._lock:
            index = self._build()
            self._index = index
        return index
