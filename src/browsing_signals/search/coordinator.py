"""Run a query through the search layers and report which one answered."""

from __future__ import annotations

import logging
from typing import Sequence

from browsing_signals.activity.models import PageEvent, Session
from browsing_signals.config import SearchConfig
from browsing_signals.search.keyword import search_by_keywords
from browsing_signals.search.models import SearchResult
from browsing_signals.search.semantic import search_semantic

logger = logging.getLogger(__name__)


def flatten_pages(sessions: Sequence[Session]) -> list[PageEvent]:
    """Most recent page per URL, newest sessions first."""
    by_url: dict[str, PageEvent] = {}
    for session in reversed(sessions):
        for page in reversed(session.pages):
            by_url.setdefault(page.url, page)
    return list(by_url.values())


def execute_search(
    query: str,
    sessions: Sequence[Session],
    config: SearchConfig | None = None,
) -> list[SearchResult]:
    """Semantic results when there are any, otherwise keyword results."""
    cfg = config or SearchConfig()
    trimmed = (query or "").strip()
    if not trimmed:
        return []

    pages = flatten_pages(sessions)

    semantic = search_semantic(trimmed, pages, min_score=cfg.min_score)
    if semantic:
        return [SearchResult(r.page_event, r.score, "semantic") for r in semantic]

    logger.debug("No semantic matches for %r, falling back to keywords", trimmed)
    return [
        SearchResult(r.page_event, r.score, "keyword")
        for r in search_by_keywords(trimmed, pages)
    ]


def log_search_results(query: str, results: Sequence[SearchResult], elapsed_ms: float) -> None:
    """Log the top ten results of a query."""
    logger.info("Search completed in %.1fms for query: %r", elapsed_ms, query)
    if not results:
        logger.info("No results found for query: %r", query)
        return
    for rank, result in enumerate(results[:10], start=1):
        logger.info(
            "#%d [%s] score=%.4f title=%r url=%s",
            rank, result.layer, result.score,
            result.page_event.title, result.page_event.url,
        )
