"""Tests for project candidate scoring and lifecycle."""

import pytest

from browsing_signals.activity.models import PageEvent
from browsing_signals.config import DAY_MS, HOUR_MS, CandidateThresholds
from browsing_signals.exceptions import CandidateNotFoundError
from browsing_signals.projects.candidates import (
    CandidateDetector,
    calculate_candidate_score,
    dismiss_candidate,
    extract_title_keywords,
    mark_candidate_notified,
    promote_candidate,
    ready_candidates,
    snooze_candidate,
)
from browsing_signals.projects.models import ProjectCandidate

REPO = "https://github.com/acme/rocket"


def _page(url=REPO, title="Rocket engine simulator", ts=0):
    return PageEvent(url=url, title=title, domain="github.com", timestamp=ts)


def _candidate(**overrides):
    fields = dict(
        id="c1",
        primary_domain="github.com",
        first_seen=0,
        last_seen=0,
        specific_resources=["github.com/acme/rocket"],
        session_ids=["s1"],
        visit_count=1,
    )
    fields.update(overrides)
    return ProjectCandidate(**fields)


def test_score_single_visit():
    score, breakdown = calculate_candidate_score(_candidate())
    # sqrt(0.1)*40 + sqrt(0.2)*30 + sqrt(1/3)*20 + 0
    assert score == 38
    assert breakdown.visits == 13
    assert breakdown.sessions == 13
    assert breakdown.resources == 12
    assert breakdown.time_span == 0


def test_score_saturates_at_hundred():
    candidate = _candidate(
        visit_count=50,
        session_ids=[f"s{i}" for i in range(8)],
        specific_resources=["a", "b", "c", "d"],
        last_seen=3 * DAY_MS,
    )
    score, breakdown = calculate_candidate_score(candidate)
    assert score == 100
    assert breakdown.total == 100


def test_extract_title_keywords():
    assert extract_title_keywords("The Rocket engine and the simulator for kids") == [
        "rocket", "engine", "simulator", "kids",
    ]


def test_homepage_and_category_pages_are_ignored():
    detector = CandidateDetector()
    for url in ("https://github.com/", "https://github.com/explore", "about:blank"):
        candidates, notify = detector.check_page(_page(url=url), "s1", [], now=0)
        assert candidates == []
        assert notify is None


def test_first_visit_creates_watching_candidate():
    candidates, notify = CandidateDetector().check_page(_page(), "s1", [], now=1000)
    assert notify is None
    [candidate] = candidates
    assert candidate.status == "watching"
    assert candidate.specific_resources == ["github.com/acme/rocket"]
    assert candidate.keywords == ["rocket", "engine", "simulator"]
    assert candidate.first_seen == candidate.last_seen == 1000
    assert 0 <= candidate.score <= 100


def _visit_many(detector, visits):
    candidates = []
    notified = []
    for session_id, now in visits:
        candidates, notify = detector.check_page(_page(), session_id, candidates, now=now)
        if notify is not None:
            notified.append((session_id, notify))
    return candidates, notified


def test_candidate_becomes_ready_and_notifies():
    detector = CandidateDetector()
    visits = [("s1", 0), ("s1", HOUR_MS), ("s2", DAY_MS), ("s2", DAY_MS + 1), ("s3", 2 * DAY_MS)]
    candidates, notified = _visit_many(detector, visits)
    [candidate] = candidates
    assert candidate.status == "ready"
    assert candidate.visit_count == 5
    assert candidate.session_ids == ["s1", "s2", "s3"]
    assert notified
    assert notified[0][1] is candidate


def test_already_notified_candidate_is_not_returned_again():
    detector = CandidateDetector(CandidateThresholds.dev())
    candidates, notify = detector.check_page(_page(), "s1", [], now=0)
    candidates, notify = detector.check_page(_page(), "s1", candidates, now=1)
    assert notify is not None
    mark_candidate_notified(candidates, notify.id, "s1", now=2)
    candidates, notify = detector.check_page(_page(), "s1", candidates, now=3)
    assert notify is None
    assert candidates[0].notification_history[0].session_id == "s1"


def test_expired_and_dismissed_candidates_are_dropped():
    detector = CandidateDetector()
    old = _candidate(id="old", last_seen=0, specific_resources=["github.com/a/b"])
    gone = _candidate(id="gone", last_seen=7 * DAY_MS, status="dismissed", specific_resources=["github.com/c/d"])
    fresh = _candidate(id="fresh", last_seen=7 * DAY_MS, specific_resources=["github.com/e/f"])
    candidates, _ = detector.check_page(_page(url="https://github.com/"), "s9", [old, gone, fresh], now=8 * DAY_MS)
    assert [c.id for c in candidates] == ["fresh"]


def test_snooze_raises_visit_bar():
    detector = CandidateDetector(CandidateThresholds(min_score=0, min_visits=2, min_sessions=1, min_duration_hours=0))
    candidates, _ = detector.check_page(_page(), "s1", [], now=0)
    candidates, notify = detector.check_page(_page(), "s1", candidates, now=1)
    assert notify is not None
    snooze_candidate(candidates, notify.id)
    assert candidates[0].status == "watching"
    candidates, notify = detector.check_page(_page(), "s1", candidates, now=2)
    assert notify is None  # needs 2 + 2 visits now
    candidates, notify = detector.check_page(_page(), "s1", candidates, now=3)
    assert notify is not None


def test_lifecycle_helpers():
    candidates = [_candidate(id="a", status="ready"), _candidate(id="b")]
    assert [c.id for c in ready_candidates(candidates)] == ["a"]
    dismiss_candidate(candidates, "b")
    assert candidates[1].status == "dismissed"
    assert [c.id for c in promote_candidate(candidates, "a")] == ["b"]
    with pytest.raises(CandidateNotFoundError):
        dismiss_candidate(candidates, "missing")



def test_single_session_never_becomes_ready():
    detector = CandidateDetector(CandidateThresholds(min_score=0, min_visits=2, min_duration_hours=0))
    candidates, notified = _visit_many(detector, [("s1", i * HOUR_MS) for i in range(6)])
    assert candidates[0].status == "watching"
    assert notified == []
    candidates, notify = detector.check_page(_page(), "s2", candidates, now=7 * HOUR_MS)
    assert candidates[0].status == "ready"
    assert notify is candidates[0]


def test_short_time_span_keeps_candidate_watching():
    detector = CandidateDetector(CandidateThresholds(min_score=0, min_visits=2, min_duration_hours=1))
    visits = [("s1", 0), ("s2", 10 * 60 * 1000), ("s3", 20 * 60 * 1000)]
    candidates, notified = _visit_many(detector, visits)
    assert candidates[0].status == "watching"
    assert notified == []
    candidates, notify = detector.check_page(_page(), "s4", candidates, now=HOUR_MS)
    assert candidates[0].status == "ready"
    assert notify is not None
