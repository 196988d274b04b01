"""Infer a display title for a browsing session.

Three tiers, each tried only when the previous one produced nothing:
the dominant domain, then recurring title keywords, then the first
page's title.
"""

from __future__ import annotations

import re
from collections import Counter

from browsing_signals.activity.models import Session
from browsing_signals.config import TitleConfig
from browsing_signals.urls import hostname_of, strip_www

_WORD_SPLIT = re.compile(r"\s+|[-_]")


def clean_domain(hostname: str, config: TitleConfig | None = None) -> str:
    """Human-readable site name, e.g. ``www.github.com`` -> ``GitHub``."""
    cfg = config or TitleConfig()
    domain = strip_www(hostname)
    name = cfg.domain_names.get(hostname) or cfg.domain_names.get(domain)
    if name:
        return name
    return domain[:1].upper() + domain[1:].split(".")[0]


def _title_from_domains(session: Session, cfg: TitleConfig) -> str | None:
    hosts = [h for h in (hostname_of(p.url) for p in session.pages) if h]
    if not hosts:
        return None
    # most_common orders equal counts by first appearance
    host, count = Counter(hosts).most_common(1)[0]
    if count < cfg.min_domain_pages:
        return None
    return f"{clean_domain(host, cfg)} browsing"


def _title_from_keywords(session: Session, cfg: TitleConfig) -> str | None:
    words = [
        w
        for page in session.pages
        for w in _WORD_SPLIT.split((page.title or "").lower())
        if len(w) >= cfg.min_keyword_length
        and w not in cfg.stopwords
        and not w.isdigit()
    ]
    top = [
        word
        for word, count in Counter(words).most_common()
        if count >= cfg.min_keyword_frequency
    ][: cfg.max_keywords]
    if not top:
        return None
    return " & ".join(w[:1].upper() + w[1:] for w in top)


def _fallback_title(session: Session, cfg: TitleConfig) -> str:
    title = session.pages[0].title if session.pages else ""
    if not title:
        return cfg.fallback_title
    if len(title) > cfg.max_title_length:
        return title[: cfg.max_title_length - 3] + "..."
    return title


def infer_session_title(session: Session, config: TitleConfig | None = None) -> str:
    """Pick a display label for ``session``."""
    cfg = config or TitleConfig()
    return (
        _title_from_domains(session, cfg)
        or _title_from_keywords(session, cfg)
        or _fallback_title(session, cfg)
    )
