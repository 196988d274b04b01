"""Data models for the projects module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

CandidateStatus = Literal["watching", "ready", "dismissed"]
ProjectStatus = Literal["active", "stale", "completed"]


@dataclass
class ScoreBreakdown:
    """Rounded contribution of each scoring factor."""

    visits: int = 0
    sessions: int = 0
    resources: int = 0
    time_span: int = 0
    total: int = 0


@dataclass
class NotificationRecord:
    session_id: str
    timestamp: int
    action: str  # "shown"


@dataclass
class ProjectCandidate:
    """A cluster of recurring visits that may turn into a project."""

    id: str
    primary_domain: str
    first_seen: int
    last_seen: int
    specific_resources: list[str] = field(default_factory=list)
    session_ids: list[str] = field(default_factory=list)
    visit_count: int = 0
    keywords: list[str] = field(default_factory=list)
    related_domains: list[str] = field(default_factory=list)
    score: int = 0  # 0..100
    score_breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)
    status: CandidateStatus = "watching"
    notification_shown: bool = False
    snooze_count: int = 0
    notification_history: list[NotificationRecord] = field(default_factory=list)

    def was_notified_in(self, session_id: str) -> bool:
        return any(
            h.session_id == session_id and h.action == "shown"
            for h in self.notification_history
        )


@dataclass
class DetectedProject:
    """A project recovered from past sessions by clustering shared resources."""

    id: str
    name: str
    start_date: int
    end_date: int
    session_ids: list[str]
    keywords: list[str]
    top_domains: list[str]
    status: ProjectStatus
    created_at: int
    score: int  # 0..100
    auto_detected: bool = True
    dominant_label: str | None = None
