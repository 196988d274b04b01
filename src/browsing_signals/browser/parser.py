"""Normalize raw browser history rows into page events."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import dateutil.parser

from browsing_signals.activity.models import PageEvent
from browsing_signals.urls import parse_url, strip_www

logger = logging.getLogger(__name__)


def parse_visit(
    raw: dict,
    excluded_domains: list[str] | None = None,
    max_url_length: int = 2000,
    max_title_length: int = 300,
) -> PageEvent | None:
    """Normalize one raw visit row; returns None for filtered/invalid rows.

    ``visited_at`` may be epoch milliseconds or any date string
    ``dateutil`` understands; naive datetimes are taken as local time.
    """
    url = (raw.get("url") or "").strip()
    if not url:
        return None
    if len(url) > max_url_length:
        url = url[:max_url_length]

    parts = parse_url(url)
    if parts is None or parts.scheme not in {"http", "https"} or not parts.hostname:
        return None

    domain = strip_www(parts.hostname)
    if _is_excluded_domain(domain, excluded_domains or []):
        return None

    timestamp = _to_epoch_ms(raw.get("visited_at"))
    if timestamp is None:
        return None

    title = (raw.get("title") or "").strip()
    if len(title) > max_title_length:
        title = title[:max_title_length]

    return PageEvent(
        url=url,
        title=title,
        domain=domain,
        timestamp=timestamp,
        was_foreground=raw.get("was_foreground"),
        referrer=raw.get("referrer") or None,
    )


def parse_visits(raw_rows: list[dict], excluded_domains: list[str] | None = None) -> list[PageEvent]:
    """Parse many rows, oldest visit first."""
    pages = [p for p in (parse_visit(r, excluded_domains) for r in raw_rows) if p is not None]
    pages.sort(key=lambda p: p.timestamp)
    return pages


def _to_epoch_ms(value) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = dateutil.parser.isoparse(str(value).strip())
        except ValueError:
            try:
                parsed = dateutil.parser.parse(str(value))
            except (ValueError, OverflowError) as e:
                logger.debug("Unparseable visit time %r: %s", value, e)
                return None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return int(parsed.astimezone(timezone.utc).timestamp() * 1000)


def _is_excluded_domain(domain: str, excluded_domains: list[str]) -> bool:
    for blocked in excluded_domains:
        b = blocked.strip().lower()
        if not b:
            continue
        if domain == b or domain.endswith(f".{b}"):
            return True
    return False
