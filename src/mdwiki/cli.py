"""Command line interface for MDWiki search."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

import typer
from rich.console import Console
from rich.table import Table

from mdwiki.config import AppConfig
from mdwiki.index.holder import IndexHolder
from mdwiki.index.search import Searcher
from mdwiki.ingestion.markdown_loader import DocumentCache
from mdwiki.web.app import app as web_app
from mdwiki.web.app import configure_app


console = Console()
app = typer.Typer(help="MDWiki - Korean-aware search for a markdown wiki")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _resolve_docs_dir(docs: Path | None) -> Path:
    config = AppConfig(docs_dir=docs if docs is not None else AppConfig().docs_dir)
    resolved = config.resolve_docs_dir(Path.cwd())
    if not resolved.is_dir():
        raise typer.BadParameter(f"Docs directory not found: {resolved}")
    return resolved


def _build_searcher(docs_dir: Path, config: AppConfig) -> Tuple[Searcher, DocumentCache]:
    cache = DocumentCache(docs_dir)
    holder = IndexHolder(cache.documents, config.search)
    return Searcher(holder), cache


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    docs: Path = typer.Option(None, "--docs", help="Wiki directory with markdown files"),
    limit: int = typer.Option(AppConfig().limit, help="Number of results to display"),
    fuzzy: bool = typer.Option(AppConfig().fuzzy, "--fuzzy/--no-fuzzy", help="Fall back to title similarity"),
    threshold: float = typer.Option(AppConfig().threshold, help="Minimum title similarity for fuzzy matches"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search the wiki."""
    _setup_logging(verbose)
    docs_dir = _resolve_docs_dir(docs)
    config = AppConfig(docs_dir=docs_dir, limit=limit, fuzzy=fuzzy, threshold=threshold)
    searcher, _ = _build_searcher(docs_dir, config)

    results = searcher.search(query, limit=config.limit, fuzzy=config.fuzzy, threshold=config.threshold)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Title")
    table.add_column("Slug")
    table.add_column("Excerpt")

    for result in results:
        table.add_row(str(result.score), result.title, result.slug, result.excerpt)

    console.print(table)


@app.command()
def suggest(
    query: str = typer.Argument(..., help="Partial query"),
    docs: Path = typer.Option(None, "--docs", help="Wiki directory with markdown files"),
    limit: int = typer.Option(AppConfig().suggestion_limit, help="Number of suggestions"),
) -> None:
    """Suggest titles and tags for a partial query."""
    docs_dir = _resolve_docs_dir(docs)
    config = AppConfig(docs_dir=docs_dir)
    searcher, _ = _build_searcher(docs_dir, config)

    suggestions = searcher.suggest(query, limit=limit)
    if not suggestions:
        console.print("[yellow]No suggestions.[/yellow]")
        return

    for suggestion in suggestions:
        console.print(suggestion)


@app.command()
def stats(
    docs: Path = typer.Option(None, "--docs", help="Wiki directory with markdown files"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Load the wiki, build the index and report its size."""
    _setup_logging(verbose)
    docs_dir = _resolve_docs_dir(docs)
    config = AppConfig(docs_dir=docs_dir)
    searcher, cache = _build_searcher(docs_dir, config)
    index = searcher.holder.current

    console.print(
        f"Loaded: {cache.stats.loaded}, skipped: {cache.stats.skipped}, "
        f"failed: {cache.stats.failed}"
    )

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Field")
    table.add_column("Keys")
    for name, field_index in index.fields():
        table.add_row(name, str(len(field_index)))
    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    docs: Path = typer.Option(None, "--docs", help="Wiki directory with markdown files"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional extra
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = AppConfig(docs_dir=docs if docs is not None else AppConfig().docs_dir)
    resolved_docs = config.resolve_docs_dir(Path.cwd())
    if not resolved_docs.is_dir():
        console.print("[yellow]Warning: docs directory not found, the index will be empty.[/yellow]")

    config.docs_dir = resolved_docs
    configure_app(config)
    console.print(
        f"Starting web interface on http://{host}:{port} (docs: {resolved_docs})"
    )
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )

