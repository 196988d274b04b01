"""Tests for session segmentation."""

from browsing_signals.activity.models import PageEvent, Session
from browsing_signals.activity.sessions import SessionBuilder, annotate_session, segment_sessions
from browsing_signals.config import SessionConfig

MINUTE = 60 * 1000


def _page(ts, url="https://example.com/a"):
    return PageEvent(url=url, title="", domain="example.com", timestamp=ts)


def _ids():
    counter = iter(range(100))
    return lambda start: f"s{next(counter)}"


def test_splits_on_idle_gap():
    pages = [_page(0), _page(10 * MINUTE), _page(41 * MINUTE), _page(50 * MINUTE)]
    sessions = segment_sessions(pages, id_factory=_ids())
    assert [s.id for s in sessions] == ["s0", "s1"]
    assert [len(s.pages) for s in sessions] == [2, 2]
    assert sessions[0].start_time == 0
    assert sessions[0].end_time == 10 * MINUTE
    assert sessions[1].start_time == 41 * MINUTE


def test_gap_equal_to_limit_stays_in_session():
    sessions = segment_sessions([_page(0), _page(30 * MINUTE)])
    assert len(sessions) == 1


def test_sorts_input_by_timestamp():
    sessions = segment_sessions([_page(5), _page(1), _page(3)])
    assert [p.timestamp for p in sessions[0].pages] == [1, 3, 5]


def test_custom_gap():
    sessions = segment_sessions([_page(0), _page(2 * MINUTE)], SessionConfig(gap_ms=MINUTE))
    assert len(sessions) == 2


def test_default_ids_are_unique():
    sessions = segment_sessions([_page(0), _page(60 * MINUTE)])
    assert sessions[0].id != sessions[1].id
    assert sessions[0].id.startswith("session-0-")


def test_builder_returns_landing_session():
    builder = SessionBuilder(id_factory=_ids())
    first = builder.add(_page(0))
    again = builder.add(_page(MINUTE))
    assert first is again
    assert builder.add(_page(90 * MINUTE)).id == "s1"


def test_empty_input():
    assert segment_sessions([]) == []


def test_annotate_session_sets_title_without_mutating():
    session = Session(
        id="s",
        start_time=0,
        end_time=1,
        pages=[_page(0, "https://github.com/a/b"), _page(1, "https://github.com/c/d")],
    )
    annotated = annotate_session(session)
    assert annotated.inferred_title == "GitHub browsing"
    assert session.inferred_title is None
    assert annotated.pages is not session.pages


def test_builder_inserts_late_page_in_order():
    builder = SessionBuilder(id_factory=_ids())
    builder.add(_page(10 * MINUTE))
    builder.add(_page(20 * MINUTE))
    landed = builder.add(_page(5 * MINUTE))
    assert [p.timestamp for p in landed.pages] == [5 * MINUTE, 10 * MINUTE, 20 * MINUTE]
    assert landed.start_time == 5 * MINUTE
    assert landed.end_time == 20 * MINUTE


def test_builder_places_late_page_in_earlier_session():
    builder = SessionBuilder(id_factory=_ids())
    builder.add(_page(0))
    builder.add(_page(2 * MINUTE))
    builder.add(_page(120 * MINUTE))
    landed = builder.add(_page(MINUTE))
    assert landed.id == "s0"
    assert [p.timestamp for p in builder.sessions[0].pages] == [0, MINUTE, 2 * MINUTE]
    assert [p.timestamp for p in builder.sessions[1].pages] == [120 * MINUTE]


def test_builder_opens_earlier_session_in_start_order():
    builder = SessionBuilder(id_factory=_ids())
    builder.add(_page(120 * MINUTE))
    builder.add(_page(0))
    assert [s.start_time for s in builder.sessions] == [0, 120 * MINUTE]


def test_builder_merges_sessions_bridged_by_late_page():
    builder = SessionBuilder(id_factory=_ids())
    builder.add(_page(0))
    builder.add(_page(50 * MINUTE))
    assert len(builder.sessions) == 2
    merged = builder.add(_page(25 * MINUTE))
    assert len(builder.sessions) == 1
    assert merged.id == "s0"
    assert [p.timestamp for p in merged.pages] == [0, 25 * MINUTE, 50 * MINUTE]
    assert merged.end_time == 50 * MINUTE


def test_builder_matches_sorted_segmentation():
    stamps = [40, 0, 95, 12, 75, 33, 170, 101]
    builder = SessionBuilder(id_factory=_ids())
    for ts in stamps:
        builder.add(_page(ts * MINUTE))
    expected = segment_sessions([_page(ts * MINUTE) for ts in stamps])
    assert len(expected) == 3
    assert [[p.timestamp for p in s.pages] for s in builder.sessions] == [
        [p.timestamp for p in s.pages] for s in expected
    ]
