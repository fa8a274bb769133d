"""FastAPI application backing the MDWiki search UI."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from mdwiki.config import AppConfig
from mdwiki.index.holder import IndexHolder
from mdwiki.index.indexer import SearchIndex
from mdwiki.index.search import Searcher, SearchResult
from mdwiki.ingestion.markdown_loader import DocumentCache
from mdwiki.web.frontend import router as frontend_router

LOGGER = logging.getLogger(__name__)

MAX_LIMIT = 50

app = FastAPI(title="MDWiki Search", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(frontend_router)


class SearchPayload(BaseModel):
    query: str
    limit: int = 20
    fuzzy: bool = True
    threshold: float = Field(0.3, ge=0.0, le=1.0)


def configure_app(config: AppConfig) -> None:
    """Attach a document cache, index holder and searcher for ``config``."""
    docs_dir = config.resolve_docs_dir(Path.cwd())
    cache = DocumentCache(docs_dir)
    holder = IndexHolder(cache.documents, config.search)
    app.state.config = config
    app.state.cache = cache
    app.state.holder = holder
    app.state.searcher = Searcher(holder)


def _get_searcher() -> Searcher:
    if getattr(app.state, "searcher", None) is None:
        configure_app(AppConfig())
    return app.state.searcher


def _get_cache() -> DocumentCache:
    _get_searcher()
    return app.state.cache


def _rebuild_index(cache: DocumentCache, holder: IndexHolder) -> SearchIndex:
    cache.invalidate()
    return holder.rebuild()


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/search")
async def search_documents(payload: SearchPayload) -> dict[str, List[SearchResult]]:
    query = payload.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Empty query")

    limit = max(1, min(payload.limit, MAX_LIMIT))
    searcher = _get_searcher()
    results = searcher.search(
        query, limit=limit, fuzzy=payload.fuzzy, threshold=payload.threshold
    )
    return {"results": results}


@app.get("/suggest")
async def suggest(q: str = "", limit: int = 5) -> dict[str, List[str]]:
    limit = max(1, min(limit, MAX_LIMIT))
    return {"suggestions": _get_searcher().suggest(q, limit=limit)}


@app.get("/documents")
async def list_documents() -> dict[str, Any]:
    """List all documents currently in the wiki, flat and as a folder tree."""
    cache = _get_cache()
    documents = [
        {"slug": doc.slug, "title": doc.title, "path": doc.path, "tags": list(doc.tags)}
        for doc in cache.documents()
    ]
    stats = {
        "document_count": len(documents),
        "loaded": cache.stats.loaded,
        "skipped": cache.stats.skipped,
        "failed": cache.stats.failed,
    }
    tree = [asdict(node) for node in cache.tree()]
    return {"documents": documents, "tree": tree, "stats": stats}


@app.get("/documents/{slug:path}")
async def get_document(slug: str) -> dict[str, Any]:
    document = _get_cache().get(slug)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Document not found: {slug}")

    return {
        "slug": document.slug,
        "title": document.title,
        "path": document.path,
        "tags": list(document.tags),
        "content": document.content,
    }


@app.post("/reindex")
async def reindex() -> dict[str, Any]:
    """Reload the wiki from disk and swap in a fresh index."""
    cache = _get_cache()
    index = await asyncio.to_thread(_rebuild_index, cache, app.state.holder)
    LOGGER.info("Reindexed %d documents", len(index.documents))
    return {"status": "ok", "documents": len(index.documents)}
