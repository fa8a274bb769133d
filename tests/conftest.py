"""Shared fixtures: a small mixed English/Korean wiki."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from mdwiki.index.indexer import SearchIndex, create_search_index
from mdwiki.models import Document

WELCOME = Document(
    slug="index",
    title="Welcome to MD Docs",
    path="index.md",
    content=(
        "# Welcome to MD Docs\n\n"
        "This is your personal documentation wiki.\n\n"
        "## Getting Started\n\n"
        "Create new documents using the editor."
    ),
    tags=("documentation", "welcome"),
)

PROJECT_A = Document(
    slug="projects/project-a",
    title="Project A Documentation",
    path="projects/project-a.md",
    content=(
        "# Project A Documentation\n\n"
        "This is the documentation for Project A, a sample project.\n\n"
        "## Architecture\n\n"
        "The project follows a modular architecture."
    ),
    tags=("project", "example"),
)

KOREAN = Document(
    slug="korean/project",
    title="프로젝트 문서",
    path="korean/project.md",
    content=(
        "# 프로젝트 문서\n\n"
        "이 문서는 한글 검색을 설명합니다.\n\n"
        "## 초성 검색\n\n"
        "초성으로 문서를 찾을 수 있습니다."
    ),
    tags=("한글", "검색"),
)


@pytest.fixture
def documents() -> List[Document]:
    return [WELCOME, PROJECT_A, KOREAN]


@pytest.fixture
def index(documents: List[Document]) -> SearchIndex:
    return create_search_index(documents)


@pytest.fixture
def wiki_dir(tmp_path: Path) -> Path:
    """A wiki directory on disk with frontmatter pages."""
    root = tmp_path / "wiki"
    (root / "projects").mkdir(parents=True)
    (root / "index.md").write_text(
        "---\ntitle: Alpha\ntags:\n  - welcome\n---\n# Alpha\n\nFirst page of the wiki.\n",
        encoding="utf-8",
    )
    (root / "projects" / "beta.md").write_text(
        "---\ntitle: 베타 프로젝트\ntags: [project, 한글]\n---\n## 개요\n\n베타 프로젝트 설명입니다.\n",
        encoding="utf-8",
    )
    return root
