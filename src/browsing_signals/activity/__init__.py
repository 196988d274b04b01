"""Page visits, sessions, and per-session annotations."""

from browsing_signals.activity.models import (
    PageEvent,
    Session,
    DerivedPageMetrics,
    DerivedSessionMetrics,
)
from browsing_signals.activity.metrics import derive_page_metrics, derive_session_metrics
from browsing_signals.activity.context import PageContext, classify_page_context, is_same_context
from browsing_signals.activity.titles import clean_domain, infer_session_title
from browsing_signals.activity.sessions import SessionBuilder, annotate_session, segment_sessions

__all__ = [
    "PageEvent",
    "Session",
    "DerivedPageMetrics",
    "DerivedSessionMetrics",
    "derive_page_metrics",
    "derive_session_metrics",
    "PageContext",
    "classify_page_context",
    "is_same_context",
    "clean_domain",
    "infer_session_title",
    "SessionBuilder",
    "annotate_session",
    "segment_sessions",
]
