"""Rule-based usage-context classification from URL and title signals.

Categories are tested in a fixed order and the first one whose signals
match wins. Several signal sets overlap (a coding tutorial on YouTube is
both ``development``-ish and ``learning``), so the order is part of the
behavior.
"""

from __future__ import annotations

from typing import Callable, Literal

from browsing_signals.activity.models import PageEvent
from browsing_signals.urls import parse_url

PageContext = Literal[
    "development",
    "learning",
    "shopping",
    "research",
    "social",
    "entertainment",
    "productivity",
    "news",
    "general",
]


def _has(text: str, *needles: str) -> bool:
    return any(n in text for n in needles)


def _is_development(domain: str, path: str, title: str) -> bool:
    return (
        _has(domain, "github", "gitlab", "bitbucket", "stackoverflow", "stackexchange", "npmjs")
        or _has(title, "documentation", "api reference", "api docs")
        or _has(path, "/docs/", "/api/", "/reference/")
        or domain.endswith(".dev")
    )


def _is_learning(domain: str, path: str, title: str) -> bool:
    return (
        ("youtube" in domain and _has(title, "tutorial", "how to", "learn"))
        or _has(
            domain, "udemy", "coursera", "edx", "khanacademy",
            "pluralsight", "codecademy", "freecodecamp",
        )
        or _has(title, "tutorial", "how to", "learn", "course", "lesson")
        or domain.endswith(".edu")
    )


def _is_shopping(domain: str, path: str, title: str) -> bool:
    return (
        _has(domain, "amazon", "ebay", "etsy", "shopify", "aliexpress")
        or _has(path, "/cart", "/checkout", "/product", "/shop")
        or _has(title, "buy", "shop", "cart", "price", "deal")
    )


def _is_research(domain: str, path: str, title: str) -> bool:
    return (
        _has(domain, "wikipedia", "arxiv", "scholar.google", "researchgate", "jstor", "pubmed")
        or _has(title, "paper", "research", "study", "journal", "article")
        or "/wiki/" in path
    )


def _is_social(domain: str, path: str, title: str) -> bool:
    return (
        _has(
            domain, "twitter", "x.com", "reddit", "linkedin",
            "facebook", "instagram", "tiktok", "discord",
        )
        # Slack app directory pages are tooling, not conversation.
        or ("slack" in domain and "/apps/" not in path)
        or _has(title, "tweet", "post")
        or _has(path, "/status/", "/r/")
    )


def _is_entertainment(domain: str, path: str, title: str) -> bool:
    return (
        ("youtube" in domain and "tutorial" not in title)
        or _has(domain, "netflix", "hulu", "twitch", "spotify", "vimeo", "imgur")
        or _has(title, "watch", "stream", "video", "music")
        or "/watch" in path
    )


def _is_productivity(domain: str, path: str, title: str) -> bool:
    return (
        _has(
            domain, "notion", "trello", "asana", "jira", "monday", "airtable",
            "google.com/calendar", "docs.google", "sheets.google", "drive.google",
            "mail.google", "outlook",
        )
        or _has(title, "calendar", "tasks", "notes")
    )


def _is_news(domain: str, path: str, title: str) -> bool:
    return (
        _has(
            domain, "news", "nytimes", "bbc", "cnn", "reuters",
            "bloomberg", "techcrunch", "theverge",
        )
        or ("medium" in domain and "news" in title)
        or domain.endswith(".news")
        or _has(title, "breaking", "headlines")
    )


CONTEXT_RULES: tuple[tuple[PageContext, Callable[[str, str, str], bool]], ...] = (
    ("development", _is_development),
    ("learning", _is_learning),
    ("shopping", _is_shopping),
    ("research", _is_research),
    ("social", _is_social),
    ("entertainment", _is_entertainment),
    ("productivity", _is_productivity),
    ("news", _is_news),
)


def classify_page_context(page: PageEvent) -> PageContext:
    """Assign ``page`` to a coarse usage context; unparseable URLs are ``general``."""
    parts = parse_url(page.url)
    if parts is None:
        return "general"

    domain = (parts.hostname or "").lower()
    path = (parts.path or "/").lower()
    title = (page.title or "").lower()

    for context, matches in CONTEXT_RULES:
        if matches(domain, path, title):
            return context
    return "general"


def is_same_context(a: PageEvent, b: PageEvent) -> bool:
    """Whether two visits fall in the same activity context."""
    return classify_page_context(a) == classify_page_context(b)
