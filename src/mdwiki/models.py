"""Core MDWiki data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union


@dataclass(slots=True, frozen=True)
class Document:
    """A wiki page as supplied by the content layer.

    ``content`` is the markdown body with any frontmatter already removed.
    """

    slug: str
    title: str
    path: str
    content: str
    tags: Tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class IndexedDocument:
    """Search-ready projection of a :class:`Document`."""

    id: int
    slug: str
    title: str
    path: str
    plain_content: str
    tags: Tuple[str, ...]
    headings: Tuple[str, ...]


@dataclass(slots=True)
class FileNode:
    """A page in the document tree."""

    slug: str
    title: str
    type: str = field(default="file", init=False)


@dataclass(slots=True)
class FolderNode:
    """A slug directory segment in the document tree."""

    name: str
    title: str
    children: List[TreeNode] = field(default_factory=list)
    type: str = field(default="folder", init=False)


TreeNode = Union[FileNode, FolderNode]
