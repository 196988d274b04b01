"""Tests for the search coordinator."""

import logging

from browsing_signals.activity.models import PageEvent, Session
from browsing_signals.search.coordinator import execute_search, flatten_pages, log_search_results
from browsing_signals.search.models import SearchResult


def _page(url, title, ts):
    return PageEvent(url=url, title=title, domain="example.com", timestamp=ts)


def _sessions():
    return [
        Session(id="s1", start_time=0, end_time=2, pages=[
            _page("https://a.com/react", "React hooks guide", 0),
            _page("https://a.com/vue", "Vue basics", 2),
        ]),
        Session(id="s2", start_time=10, end_time=11, pages=[
            _page("https://a.com/react", "React hooks guide (updated)", 10),
            _page("https://a.com/bread", "Sourdough bread", 11),
        ]),
    ]


def test_flatten_keeps_most_recent_page_per_url():
    pages = flatten_pages(_sessions())
    by_url = {p.url: p for p in pages}
    assert len(pages) == 3
    assert by_url["https://a.com/react"].timestamp == 10
    assert pages[0].url == "https://a.com/bread"


def test_execute_search_uses_semantic_layer():
    results = execute_search("  react hooks ", _sessions())
    assert results
    assert all(r.layer == "semantic" for r in results)
    assert results[0].page_event.url == "https://a.com/react"


def test_blank_query():
    assert execute_search("   ", _sessions()) == []


def test_log_search_results(caplog):
    page = _page("https://a.com/react", "React", 0)
    with caplog.at_level(logging.INFO, logger="browsing_signals.search.coordinator"):
        log_search_results("react", [SearchResult(page, 0.9, "semantic")], 1.5)
    assert "#1 [semantic] score=0.9000" in caplog.text


def test_log_empty_results(caplog):
    with caplog.at_level(logging.INFO, logger="browsing_signals.search.coordinator"):
        log_search_results("nothing", [], 0.2)
    assert "No results found" in caplog.text
