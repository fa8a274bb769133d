"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from mdwiki.index.tokenizer import TokenizeStrategy

FIELDS = ("title", "tags", "headings", "content")


def _get_default_docs_dir() -> Path:
    """Get the default wiki directory for the current working context."""
    # Prefer a docs/ folder next to where the tool is run
    local_docs = Path("docs")
    if local_docs.is_dir():
        return local_docs

    return Path.home() / "Documents" / "MDWiki"


def _default_strategies() -> Dict[str, TokenizeStrategy]:
    strategies = dict.fromkeys(FIELDS, TokenizeStrategy.FORWARD)
    # Any substring of a title finds its page
    strategies["title"] = TokenizeStrategy.SUBSTRING
    return strategies


@dataclass(slots=True, frozen=True)
class FieldWeights:
    title: float = 3.0
    tags: float = 2.5
    headings: float = 2.0
    content: float = 1.0

    def for_field(self, name: str) -> float:
        return getattr(self, name)

    @property
    def total(self) -> float:
        return self.title + self.tags + self.headings + self.content


@dataclass(slots=True, frozen=True)
class ProbeLimits:
    """Maximum candidates taken from each field index per query variant."""

    title: int = 50
    tags: int = 50
    headings: int = 50
    content: int = 100

    def for_field(self, name: str) -> int:
        return getattr(self, name)


@dataclass(slots=True)
class SearchConfig:
    """Tunable constants of the ranking pipeline."""

    weights: FieldWeights = field(default_factory=FieldWeights)
    probe_limits: ProbeLimits = field(default_factory=ProbeLimits)
    korean_weight_factor: float = 0.8
    korean_content_limit: int = 5000
    excerpt_length: int = 150
    field_strategies: Dict[str, TokenizeStrategy] = field(default_factory=_default_strategies)

    @property
    def max_score(self) -> float:
        return self.weights.total

    def strategy_for(self, name: str) -> TokenizeStrategy:
        return self.field_strategies.get(name, TokenizeStrategy.FORWARD)


@dataclass(slots=True)
class AppConfig:
    docs_dir: Path | None = None
    limit: int = 20
    fuzzy: bool = True
    threshold: float = 0.3
    suggestion_limit: int = 5
    search: SearchConfig = field(default_factory=SearchConfig)

    def __post_init__(self) -> None:
        if self.docs_dir is None:
            self.docs_dir = _get_default_docs_dir()

    def resolve_docs_dir(self, base_dir: Path | None = None) -> Path:
        if self.docs_dir is None:
            self.docs_dir = _get_default_docs_dir()
        if Path(self.docs_dir).is_absolute() or base_dir is None:
            return Path(self.docs_dir)
        return base_dir / self.docs_dir
