"""Tests for core data models."""

from __future__ import annotations

import dataclasses

import pytest

from mdwiki.models import Document, IndexedDocument


class TestDocument:
    """Test Document dataclass."""

    def test_create_document(self) -> None:
        """Should create Document with all fields."""
        document = Document(
            slug="projects/project-a",
            title="Project A",
            path="projects/project-a.md",
            content="# Project A",
            tags=("project",),
        )

        assert document.slug == "projects/project-a"
        assert document.title == "Project A"
        assert document.path == "projects/project-a.md"
        assert document.content == "# Project A"
        assert document.tags == ("project",)

    def test_default_tags(self) -> None:
        """Should default to no tags."""
        document = Document(slug="a", title="A", path="a.md", content="")
        assert document.tags == ()

    def test_document_equality(self) -> None:
        """Should compare documents by value."""
        doc1 = Document(slug="a", title="A", path="a.md", content="x")
        doc2 = Document(slug="a", title="A", path="a.md", content="x")

        assert doc1 == doc2

    def test_document_is_immutable(self) -> None:
        """Should reject attribute assignment."""
        document = Document(slug="a", title="A", path="a.md", content="")
        with pytest.raises(dataclasses.FrozenInstanceError):
            document.title = "B"  # type: ignore[misc]


class TestIndexedDocument:
    """Test IndexedDocument dataclass."""

    def test_create_indexed_document(self) -> None:
        """Should create IndexedDocument with all fields."""
        indexed = IndexedDocument(
            id=0,
            slug="a",
            title="A",
            path="a.md",
            plain_content="text",
            tags=("t",),
            headings=("A",),
        )

        assert indexed.id == 0
        assert indexed.plain_content == "text"
        assert indexed.headings == ("A",)

    def test_indexed_document_is_immutable(self) -> None:
        """Should reject attribute assignment."""
        indexed = IndexedDocument(
            id=0, slug="a", title="A", path="a.md", plain_content="", tags=(), headings=()
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            indexed.id = 1  # type: ignore[misc]
