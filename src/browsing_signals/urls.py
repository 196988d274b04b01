"""URL parsing shared by the extractor, classifier and title inference."""

from __future__ import annotations

from urllib.parse import SplitResult, urlsplit


def parse_url(url: str) -> SplitResult | None:
    """Split an absolute URL; returns None when it has no scheme or is malformed."""
    try:
        parts = urlsplit((url or "").strip())
        parts.hostname  # raises on a malformed netloc
    except ValueError:
        return None
    if not parts.scheme:
        return None
    return parts


def hostname_of(url: str) -> str | None:
    """Lowercased hostname of ``url``, or None if it has none."""
    parts = parse_url(url)
    if parts is None or not parts.hostname:
        return None
    return parts.hostname


def strip_www(hostname: str) -> str:
    return hostname[4:] if hostname.startswith("www.") else hostname
