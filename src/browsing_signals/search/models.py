"""Data models for the search module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from browsing_signals.activity.models import PageEvent

SearchLayer = Literal["semantic", "keyword"]


@dataclass
class KeywordMatchResult:
    """A page whose title contains at least one query token."""

    page_event: PageEvent
    score: float
    match_count: int
    matched_terms: list[str] = field(default_factory=list)


@dataclass
class SemanticMatchResult:
    """A page ranked by TF-IDF cosine similarity to the query."""

    page_event: PageEvent
    score: float


@dataclass
class SearchResult:
    """A coordinated search hit, tagged with the layer that produced it."""

    page_event: PageEvent
    score: float
    layer: SearchLayer
