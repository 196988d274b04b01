"""Score recurring resources and move project candidates through their lifecycle.

A candidate starts ``watching`` and becomes ``ready`` once its score,
visit count, session count and time span all clear the thresholds. It ends
``dismissed`` if the user declines it. Candidates not seen within
``max_age_days`` expire. All state lives in the candidate list the caller
passes in and gets back.
"""

from __future__ import annotations

import logging
import math
import time
import uuid
from typing import Iterable

from browsing_signals.activity.models import PageEvent
from browsing_signals.config import (
    CANDIDATE_STOPWORDS,
    HOUR_MS,
    CandidateThresholds,
)
from browsing_signals.exceptions import CandidateNotFoundError
from browsing_signals.projects.models import (
    NotificationRecord,
    ProjectCandidate,
    ScoreBreakdown,
)
from browsing_signals.resources.extractor import extract_resource_identifier

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_candidate_id() -> str:
    return f"candidate-{uuid.uuid4().hex[:12]}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def extract_title_keywords(title: str, limit: int | None = 5) -> list[str]:
    """Lowercased title words longer than three characters, minus stopwords."""
    words = [
        w for w in (title or "").lower().split()
        if len(w) > 3 and w not in CANDIDATE_STOPWORDS
    ]
    return words if limit is None else words[:limit]


def calculate_candidate_score(candidate: ProjectCandidate) -> tuple[int, ScoreBreakdown]:
    """Confidence in [0, 100] and its per-factor breakdown.

    Visits (40), sessions (30) and distinct resources (20) use square-root
    scaling so early evidence counts for more; time span (10) is linear up
    to one day.
    """
    visit_score = math.sqrt(min(1.0, candidate.visit_count / 10)) * 40
    session_score = math.sqrt(min(1.0, len(candidate.session_ids) / 5)) * 30
    resource_score = math.sqrt(min(1.0, len(candidate.specific_resources) / 3)) * 20
    hours = max(0, candidate.last_seen - candidate.first_seen) / HOUR_MS
    time_score = min(10.0, hours / 24 * 10)

    total = visit_score + session_score + resource_score + time_score
    score = max(0, min(100, _round_half_up(total)))
    return score, ScoreBreakdown(
        visits=_round_half_up(visit_score),
        sessions=_round_half_up(session_score),
        resources=_round_half_up(resource_score),
        time_span=_round_half_up(time_score),
        total=score,
    )


def _rescore(candidate: ProjectCandidate) -> None:
    candidate.score, candidate.score_breakdown = calculate_candidate_score(candidate)


class CandidateDetector:
    """Incremental project detection, run on every page visit.

    Args:
        thresholds: Promotion and expiry rules; production defaults if omitted.
    """

    def __init__(self, thresholds: CandidateThresholds | None = None):
        self.thresholds = thresholds or CandidateThresholds()

    def active(self, candidates: Iterable[ProjectCandidate], now: int) -> list[ProjectCandidate]:
        """Candidates that are neither dismissed nor expired."""
        max_age = self.thresholds.max_age_ms
        return [
            c for c in candidates
            if c.status != "dismissed" and (now - c.last_seen) < max_age
        ]

    def check_page(
        self,
        page: PageEvent,
        session_id: str,
        candidates: Iterable[ProjectCandidate],
        now: int | None = None,
    ) -> tuple[list[ProjectCandidate], ProjectCandidate | None]:
        """Fold one visit into the candidate list.

        Returns the surviving candidates and, when a candidate has just
        become worth surfacing in this session, that candidate.
        """
        now = _now_ms() if now is None else now
        active = self.active(candidates, now)

        resource = extract_resource_identifier(page.url)
        if resource is None or resource.specificity in ("homepage", "category"):
            return active, None

        candidate = next(
            (c for c in active if resource.identifier in c.specific_resources),
            None,
        )
        if candidate is None:
            candidate = ProjectCandidate(
                id=_new_candidate_id(),
                primary_domain=resource.domain,
                first_seen=now,
                last_seen=now,
                specific_resources=[resource.identifier],
                session_ids=[session_id],
                visit_count=1,
                keywords=extract_title_keywords(page.title),
                related_domains=[resource.domain],
            )
            _rescore(candidate)
            active.append(candidate)
            logger.debug("Watching new candidate %s for %s", candidate.id, resource.identifier)
            return active, None

        if session_id not in candidate.session_ids:
            candidate.session_ids.append(session_id)
        candidate.visit_count += 1
        candidate.last_seen = now
        for word in extract_title_keywords(page.title, limit=None):
            if word not in candidate.keywords:
                candidate.keywords.append(word)
        _rescore(candidate)

        required_visits = (
            self.thresholds.min_visits
            + candidate.snooze_count * self.thresholds.snooze_visit_penalty
        )
        if (
            candidate.status == "watching"
            and not candidate.notification_shown
            and candidate.score >= self.thresholds.min_score
            and candidate.visit_count >= required_visits
            and len(candidate.session_ids) >= self.thresholds.min_sessions
            and candidate.last_seen - candidate.first_seen >= self.thresholds.min_duration_hours * HOUR_MS
        ):
            candidate.status = "ready"
            logger.info("Candidate %s is ready (score %d)", candidate.id, candidate.score)

        if (
            candidate.status == "ready"
            and not candidate.notification_shown
            and not candidate.was_notified_in(session_id)
        ):
            return active, candidate
        return active, None


def _find(candidates: Iterable[ProjectCandidate], candidate_id: str) -> ProjectCandidate:
    for candidate in candidates:
        if candidate.id == candidate_id:
            return candidate
    raise CandidateNotFoundError(f"No candidate with id {candidate_id!r}")


def dismiss_candidate(candidates: list[ProjectCandidate], candidate_id: str) -> ProjectCandidate:
    """The user declined this candidate; it will not be surfaced again."""
    candidate = _find(candidates, candidate_id)
    candidate.status = "dismissed"
    return candidate


def snooze_candidate(candidates: list[ProjectCandidate], candidate_id: str) -> ProjectCandidate:
    """Put a ready candidate back to watching; each snooze raises the visit bar."""
    candidate = _find(candidates, candidate_id)
    candidate.snooze_count += 1
    candidate.status = "watching"
    candidate.notification_shown = False
    return candidate


def mark_candidate_notified(
    candidates: list[ProjectCandidate],
    candidate_id: str,
    session_id: str,
    now: int | None = None,
) -> ProjectCandidate:
    candidate = _find(candidates, candidate_id)
    candidate.notification_shown = True
    candidate.notification_history.append(NotificationRecord(
        session_id=session_id,
        timestamp=_now_ms() if now is None else now,
        action="shown",
    ))
    return candidate


def promote_candidate(candidates: list[ProjectCandidate], candidate_id: str) -> list[ProjectCandidate]:
    """Remove a candidate that has become a full project."""
    _find(candidates, candidate_id)
    return [c for c in candidates if c.id != candidate_id]


def ready_candidates(candidates: Iterable[ProjectCandidate]) -> list[ProjectCandidate]:
    return [c for c in candidates if c.status == "ready" and not c.notification_shown]

