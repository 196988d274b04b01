"""Exact-token keyword matching over page titles."""

from __future__ import annotations

from typing import Iterable

from browsing_signals.activity.models import PageEvent
from browsing_signals.search.models import KeywordMatchResult
from browsing_signals.search.tokenizer import tokenize


def search_by_keywords(query: str, pages: Iterable[PageEvent]) -> list[KeywordMatchResult]:
    """Rank pages by how many query tokens their title contains.

    Score is ``match_count + 1 / max(title_token_count, 1)``, so among equal
    match counts a shorter (denser) title ranks higher. Equal scores keep
    input order.
    """
    terms = tokenize(query)
    if not terms:
        return []

    results: list[KeywordMatchResult] = []
    for page in pages:
        title_tokens = tokenize(page.title)
        title_set = set(title_tokens)
        matched = [term for term in terms if term in title_set]
        if not matched:
            continue
        results.append(KeywordMatchResult(
            page_event=page,
            score=len(matched) + 1 / max(len(title_tokens), 1),
            match_count=len(matched),
            matched_terms=matched,
        ))

    results.sort(key=lambda r: r.score, reverse=True)
    return results
