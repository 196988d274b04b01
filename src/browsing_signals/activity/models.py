"""Data models for the activity module."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PageEvent:
    """A single captured page visit."""

    url: str
    title: str
    domain: str
    timestamp: int  # epoch milliseconds
    was_foreground: bool | None = None
    referrer: str | None = None


@dataclass
class Session:
    """A run of page visits without a long idle gap, ordered by visit time."""

    id: str
    start_time: int
    end_time: int
    pages: list[PageEvent] = field(default_factory=list)
    inferred_title: str | None = None
    label_id: str | None = None
    project_id: str | None = None


@dataclass
class DerivedPageMetrics:
    """Per-page statistics within its session."""

    position_in_session: float
    is_entry_page: bool
    is_exit_page: bool
    revisit_count: int
    dwell_time_ms: int | None = None


@dataclass
class DerivedSessionMetrics:
    """Per-session statistics."""

    session_duration_ms: int
    page_count: int
    unique_domain_count: int
    foreground_ratio: float | None = None  # None when nothing reported focus
