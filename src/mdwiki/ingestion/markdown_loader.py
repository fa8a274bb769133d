"""Markdown loading: YAML frontmatter, document projection and caching.

A wiki page looks like::

    ---
    title: Project A Documentation
    tags:
      - project
      - example
    ---
    # Project A Documentation

    Body text...
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from mdwiki.models import Document, FileNode, FolderNode, TreeNode
from mdwiki.utils.files import iter_markdown_paths

LOGGER = logging.getLogger(__name__)

_FRONTMATTER = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)
_FIRST_H1 = re.compile(r"^#[ \t]+(.+?)[ \t#]*$", re.MULTILINE)


@dataclass(slots=True)
class LoadStats:
    loaded: int = 0
    skipped: int = 0
    failed: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def increment(self, status: str, path: Path) -> None:
        if status == "loaded":
            self.loaded += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
        self.processed_files.append(path)


def parse_frontmatter(raw: str) -> Tuple[Dict[str, Any], str]:
    """Split YAML frontmatter from the markdown body.

    Returns ``({}, raw)`` when there is no frontmatter or it is not a valid
    YAML mapping.
    """
    match = _FRONTMATTER.match(raw)
    if not match:
        return {}, raw

    try:
        metadata = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        LOGGER.warning("Ignoring invalid frontmatter: %s", exc)
        return {}, raw

    if not isinstance(metadata, dict):
        return {}, raw

    return metadata, raw[match.end() :]


def _coerce_tags(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value if item is not None]
    else:
        items = [str(value)]
    return tuple(item.strip() for item in items if item.strip())


def _resolve_title(metadata: Dict[str, Any], body: str, path: Path) -> str:
    title = metadata.get("title")
    if title is not None and str(title).strip():
        return str(title).strip()

    heading = _FIRST_H1.search(body)
    if heading:
        return heading.group(1).strip()

    return path.stem


def load_document(path: Path, root: Path) -> Document:
    """Read one markdown file into a :class:`Document`.

    The slug is the path relative to ``root`` without its suffix.
    """
    raw = path.read_text(encoding="utf-8")
    metadata, body = parse_frontmatter(raw)
    relative = path.relative_to(root)
    return Document(
        slug=relative.with_suffix("").as_posix(),
        title=_resolve_title(metadata, body, path),
        path=relative.as_posix(),
        content=body,
        tags=_coerce_tags(metadata.get("tags")),
    )


def load_documents(root: Path) -> Tuple[List[Document], LoadStats]:
    """Load every markdown file under ``root`` in path order."""
    stats = LoadStats()
    documents: List[Document] = []
    seen: set[str] = set()

    if not root.is_dir():
        LOGGER.warning("Docs directory not found: %s", root)
        return documents, stats

    for path in iter_markdown_paths([root]):
        try:
            document = load_document(path, root)
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.error("Failed to load %s: %s", path, exc)
            stats.increment("failed", path)
            continue

        if document.slug in seen:
            LOGGER.warning("Duplicate slug %s, skipping %s", document.slug, path)
            stats.increment("skipped", path)
            continue

        seen.add(document.slug)
        documents.append(document)
        stats.increment("loaded", path)

    LOGGER.info(
        "Loaded %d documents from %s (skipped: %d, failed: %d)",
        stats.loaded,
        root,
        stats.skipped,
        stats.failed,
    )
    return documents, stats


def _folder_title(name: str) -> str:
    return name[:1].upper() + name[1:]


def document_tree(documents: Sequence[Document]) -> List[TreeNode]:
    """Group documents into folders by slug segment.

    Nodes keep document order: a folder appears where its first page does.
    ``projects/a`` becomes a ``projects`` folder titled ``Projects`` that
    holds the ``a`` page.
    """
    tree: List[TreeNode] = []

    for document in documents:
        *folders, _ = document.slug.split("/")
        level = tree
        for name in folders:
            folder = next(
                (
                    node
                    for node in level
                    if isinstance(node, FolderNode) and node.name == name
                ),
                None,
            )
            if folder is None:
                folder = FolderNode(name=name, title=_folder_title(name))
                level.append(folder)
            level = folder.children
        level.append(FileNode(slug=document.slug, title=document.title))

    return tree


class DocumentCache:
    """Parsed documents of one wiki directory, loaded on first use."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.stats = LoadStats()
        self._documents: Optional[List[Document]] = None
        self._by_slug: Dict[str, Document] = {}

    def documents(self) -> List[Document]:
        if self._documents is None:
            documents, stats = load_documents(self.root)
            self._documents = documents
            self._by_slug = {doc.slug: doc for doc in documents}
            self.stats = stats
        return list(self._documents)

    def get(self, slug: str) -> Optional[Document]:
        self.documents()
        return self._by_slug.get(slug)

    def tree(self) -> List[TreeNode]:
        return document_tree(self.documents())

    def invalidate(self) -> None:
        """Drop cached documents so the next access reloads from disk."""
        self._documents = None
        self._by_slug = {}

    @property
    def is_loaded(self) -> bool:
        return self._documents is not None
