"""Markdown text helpers: plain-text extraction and heading scanning."""

from __future__ import annotations

import re
from typing import List

_FENCED_CODE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE = re.compile(r"`[^`]+`")
# Images are left alone here and dropped by the next pattern.
_LINK = re.compile(r"(?<!!)\[([^\]]+)\]\([^)]+\)")
_IMAGE = re.compile(r"!\[([^\]]*)\]\([^)]+\)")
_EMPHASIS = re.compile(r"[*_]{1,3}([^*_]+)[*_]{1,3}")
_HEADING_MARKER = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_HORIZONTAL_RULE = re.compile(r"^[-*_]{3,}$", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^>\s+", re.MULTILINE)
_UNORDERED_ITEM = re.compile(r"^[\s]*[-*+]\s+", re.MULTILINE)
_ORDERED_ITEM = re.compile(r"^[\s]*\d+\.\s+", re.MULTILINE)
_WHITESPACE = re.compile(r"\s+")

_HEADING = re.compile(r"^#{1,3}\s+(.+)$", re.MULTILINE)


def strip_markdown(content: str) -> str:
    """Reduce markdown to a single line of plain text.

    Code is removed before emphasis so that ``*`` and ``_`` inside code
    never get treated as markup.
    """
    text = _FENCED_CODE.sub(" ", content)
    text = _INLINE_CODE.sub(" ", text)
    text = _LINK.sub(r"\1", text)
    text = _IMAGE.sub(" ", text)
    text = _EMPHASIS.sub(r"\1", text)
    text = _HEADING_MARKER.sub("", text)
    text = _HORIZONTAL_RULE.sub(" ", text)
    text = _BLOCKQUOTE.sub("", text)
    text = _UNORDERED_ITEM.sub(" ", text)
    text = _ORDERED_ITEM.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def extract_headings(content: str) -> List[str]:
    """Return H1-H3 heading texts in document order."""
    return [match.group(1).strip() for match in _HEADING.finditer(content)]
