"""Keyword and TF-IDF search over page titles."""

from browsing_signals.search.tokenizer import tokenize
from browsing_signals.search.models import KeywordMatchResult, SemanticMatchResult, SearchResult
from browsing_signals.search.keyword import search_by_keywords
from browsing_signals.search.semantic import TfidfIndex, search_semantic
from browsing_signals.search.coordinator import execute_search, flatten_pages, log_search_results

__all__ = [
    "tokenize",
    "KeywordMatchResult",
    "SemanticMatchResult",
    "SearchResult",
    "search_by_keywords",
    "TfidfIndex",
    "search_semantic",
    "execute_search",
    "flatten_pages",
    "log_search_results",
]
