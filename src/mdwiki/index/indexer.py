"""Build the in-memory search index from a document collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Sequence, Tuple

from mdwiki.config import FIELDS, SearchConfig
from mdwiki.index.tokenizer import FieldIndex
from mdwiki.models import Document, IndexedDocument
from mdwiki.utils.text import extract_headings, strip_markdown

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SearchIndex:
    """Four field indices plus the id -> document lookup table.

    Never mutated after :func:`create_search_index` returns; a rebuild
    produces a new instance.
    """

    title_index: FieldIndex
    content_index: FieldIndex
    tag_index: FieldIndex
    heading_index: FieldIndex
    documents: Mapping[int, IndexedDocument]
    config: SearchConfig = field(default_factory=SearchConfig)

    def field_index(self, name: str) -> FieldIndex:
        return {
            "title": self.title_index,
            "tags": self.tag_index,
            "headings": self.heading_index,
            "content": self.content_index,
        }[name]

    def fields(self) -> Iterator[Tuple[str, FieldIndex]]:
        """Yield ``(field name, index)`` in probing order."""
        for name in FIELDS:
            yield name, self.field_index(name)


def index_document(doc_id: int, document: Document) -> IndexedDocument:
    """Project a document into its search-ready form."""
    return IndexedDocument(
        id=doc_id,
        slug=document.slug,
        title=document.title,
        path=document.path,
        plain_content=strip_markdown(document.content),
        tags=tuple(document.tags),
        headings=tuple(extract_headings(document.content)),
    )


def create_search_index(
    documents: Sequence[Document], config: SearchConfig | None = None
) -> SearchIndex:
    """Index ``documents``; ids follow input order and are not stable across rebuilds."""
    config = config or SearchConfig()
    title_index = FieldIndex(config.strategy_for("title"))
    content_index = FieldIndex(config.strategy_for("content"))
    tag_index = FieldIndex(config.strategy_for("tags"))
    heading_index = FieldIndex(config.strategy_for("headings"))
    lookup: Dict[int, IndexedDocument] = {}

    for doc_id, document in enumerate(documents):
        indexed = index_document(doc_id, document)
        lookup[doc_id] = indexed

        title_index.add(doc_id, indexed.title)
        content_index.add(doc_id, indexed.plain_content)
        if indexed.tags:
            tag_index.add(doc_id, " ".join(indexed.tags))
        if indexed.headings:
            heading_index.add(doc_id, " ".join(indexed.headings))

    LOGGER.debug(
        "Indexed %d documents (%d title keys, %d content keys)",
        len(lookup),
        len(title_index),
        len(content_index),
    )
    return SearchIndex(
        title_index=title_index,
        content_index=content_index,
        tag_index=tag_index,
        heading_index=heading_index,
        documents=lookup,
        config=config,
    )
