"""Derived per-page and per-session metrics."""

from __future__ import annotations

from browsing_signals.activity.models import (
    DerivedPageMetrics,
    DerivedSessionMetrics,
    Session,
)
from browsing_signals.config import MetricsConfig


def derive_page_metrics(
    session: Session,
    config: MetricsConfig | None = None,
) -> list[DerivedPageMetrics]:
    """Compute metrics for every page of a session, in page order.

    The final page has no following event to bound its dwell time, so it
    gets ``config.max_dwell_ms``.
    """
    cfg = config or MetricsConfig()
    pages = session.pages
    count = len(pages)
    seen_urls: dict[str, int] = {}
    metrics: list[DerivedPageMetrics] = []

    for index, page in enumerate(pages):
        if index < count - 1:
            dwell = pages[index + 1].timestamp - page.timestamp
        else:
            dwell = cfg.max_dwell_ms

        metrics.append(DerivedPageMetrics(
            position_in_session=0.0 if count == 1 else index / (count - 1),
            is_entry_page=index == 0,
            is_exit_page=index == count - 1,
            revisit_count=seen_urls.get(page.url, 0),
            dwell_time_ms=dwell,
        ))
        seen_urls[page.url] = seen_urls.get(page.url, 0) + 1

    return metrics


def derive_session_metrics(session: Session) -> DerivedSessionMetrics:
    """Compute session-level metrics.

    ``foreground_ratio`` stays None unless at least one page reported
    ``was_foreground``; missing instrumentation is not the same as 0%.
    """
    pages = session.pages
    page_count = len(pages)

    foreground_ratio = None
    if any(p.was_foreground is not None for p in pages):
        foreground = sum(1 for p in pages if p.was_foreground is True)
        foreground_ratio = foreground / page_count

    return DerivedSessionMetrics(
        session_duration_ms=session.end_time - session.start_time,
        page_count=page_count,
        unique_domain_count=len({p.domain for p in pages}),
        foreground_ratio=foreground_ratio,
    )
