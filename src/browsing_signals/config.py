"""Tunable thresholds and lookup tables, injectable into each component."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable

from browsing_signals.exceptions import ConfigError

DAY_MS = 24 * 60 * 60 * 1000
HOUR_MS = 60 * 60 * 1000


def env_number(name: str, default: float, cast: Callable[[str], float] = float) -> float:
    """Read a numeric default from the environment."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


DEFAULT_MIN_SCORE = env_number("BROWSING_SIGNALS_MIN_SCORE", 0.1)
DEFAULT_SESSION_GAP_MS = int(env_number("BROWSING_SIGNALS_SESSION_GAP_MS", 30 * 60 * 1000, int))

DEFAULT_STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "up", "about", "into", "through", "during",
    "before", "after", "above", "below", "between", "under", "again", "further",
    "then", "once", "is", "am", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "having", "do", "does", "did", "doing", "would",
    "could", "ought", "i", "you", "he", "she", "it", "we", "they",
    "what", "which", "who", "when", "where", "why", "how",
    "html", "page", "results", "search", "google", "youtube", "reddit",
})

DEFAULT_DOMAIN_NAMES = {
    "github.com": "GitHub",
    "stackoverflow.com": "Stack Overflow",
    "wikipedia.org": "Wikipedia",
    "medium.com": "Medium",
    "dev.to": "Dev.to",
    "hashnode.com": "Hashnode",
    "twitter.com": "Twitter",
    "x.com": "X",
    "linkedin.com": "LinkedIn",
    "facebook.com": "Facebook",
    "instagram.com": "Instagram",
}

# Shorter list used when pulling keywords into project candidates.
CANDIDATE_STOPWORDS = frozenset({
    "the", "and", "for", "with", "this", "that", "from", "have", "been",
    "will", "your", "what", "when", "where", "which", "their", "there",
    "would", "could", "should", "about", "other", "more", "than", "into",
})

PROJECT_STOPWORDS = frozenset({
    "the", "and", "for", "with", "that", "this", "from", "have", "been",
    "will", "your", "their", "what", "which", "when", "where", "how",
    "page", "site", "home", "web", "http", "https", "www", "html",
})


def _require_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise ConfigError(f"{name} must be non-negative, got {value!r}")


@dataclass
class SearchConfig:
    """Semantic search cutoff."""

    min_score: float = DEFAULT_MIN_SCORE

    def __post_init__(self) -> None:
        if not -1.0 <= self.min_score <= 1.0:
            raise ConfigError(f"min_score must be within [-1, 1], got {self.min_score!r}")


@dataclass
class ResourceFilterConfig:
    """Thresholds deciding which aggregated resources count as project signals."""

    min_visits: int = 2
    min_sessions: int = 2
    routine_visits_per_day: float = 10.0
    routine_min_span_days: float = 1.0

    def __post_init__(self) -> None:
        _require_non_negative("min_visits", self.min_visits)
        _require_non_negative("min_sessions", self.min_sessions)
        _require_non_negative("routine_visits_per_day", self.routine_visits_per_day)
        _require_non_negative("routine_min_span_days", self.routine_min_span_days)


@dataclass
class CandidateThresholds:
    """Promotion and expiry rules for project candidates."""

    min_visits: int = 3
    min_sessions: int = 2
    min_score: int = 50
    max_age_days: float = 7
    min_duration_hours: float = 1
    snooze_visit_penalty: int = 2

    def __post_init__(self) -> None:
        for name in (
            "min_visits", "min_sessions", "max_age_days",
            "min_duration_hours", "snooze_visit_penalty",
        ):
            _require_non_negative(name, getattr(self, name))
        if not 0 <= self.min_score <= 100:
            raise ConfigError(f"min_score must be within [0, 100], got {self.min_score!r}")

    @property
    def max_age_ms(self) -> float:
        return self.max_age_days * DAY_MS

    @classmethod
    def dev(cls) -> CandidateThresholds:
        """Lowered thresholds for exercising the notification flow by hand."""
        return cls(min_visits=1, min_sessions=1, min_score=40, min_duration_hours=0)


@dataclass
class TitleConfig:
    """Inputs to session title inference."""

    stopwords: frozenset[str] = DEFAULT_STOPWORDS
    domain_names: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_DOMAIN_NAMES))
    min_domain_pages: int = 2
    min_keyword_frequency: int = 2
    max_keywords: int = 2
    min_keyword_length: int = 4
    max_title_length: int = 50
    fallback_title: str = "Browsing session"

    def __post_init__(self) -> None:
        if self.max_title_length < 4:
            raise ConfigError("max_title_length must leave room for an ellipsis")


@dataclass
class MetricsConfig:
    """Derived metric bounds."""

    max_dwell_ms: int = 10 * 60 * 1000

    def __post_init__(self) -> None:
        _require_non_negative("max_dwell_ms", self.max_dwell_ms)


@dataclass
class SessionConfig:
    """Idle gap after which a new session starts."""

    gap_ms: int = DEFAULT_SESSION_GAP_MS

    def __post_init__(self) -> None:
        _require_non_negative("gap_ms", self.gap_ms)


@dataclass
class ProjectDetectionConfig:
    """Clustering, scoring and status rules for history-based project detection."""

    min_sessions: int = 2
    min_resources: int = 2
    min_resource_visits: int = 2
    min_score: int = 50
    min_duration_hours: float = 2
    max_cluster_days: float = 30
    active_days: float = 7
    completed_days: float = 30
    specific_visit_floor: int = 3

    def __post_init__(self) -> None:
        for name in (
            "min_sessions", "min_resources", "min_resource_visits", "min_duration_hours",
            "max_cluster_days", "active_days", "completed_days", "specific_visit_floor",
        ):
            _require_non_negative(name, getattr(self, name))
        if not 0 <= self.min_score <= 100:
            raise ConfigError(f"min_score must be within [0, 100], got {self.min_score!r}")
        if self.completed_days < self.active_days:
            raise ConfigError("completed_days must not be shorter than active_days")
