"""Group a stream of page visits into sessions separated by idle gaps."""

from __future__ import annotations

import bisect
import dataclasses
import logging
import uuid
from typing import Callable, Iterable

from browsing_signals.activity.models import PageEvent, Session
from browsing_signals.activity.titles import infer_session_title
from browsing_signals.config import SessionConfig, TitleConfig

logger = logging.getLogger(__name__)


def default_session_id(start_time: int) -> str:
    return f"session-{start_time}-{uuid.uuid4().hex[:9]}"


class SessionBuilder:
    """Incrementally assign pages to sessions as they arrive.

    A page more than ``gap_ms`` after the previous session's last page
    opens a new session. Sessions stay ordered by start time.
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        id_factory: Callable[[int], str] | None = None,
    ):
        self.config = config or SessionConfig()
        self._id_factory = id_factory or default_session_id
        self.sessions: list[Session] = []

    def add(self, page: PageEvent) -> Session:
        """Place ``page`` and return the session it landed in.

        Late pages are inserted in timestamp order; if one closes the gap
        between two neighbouring sessions, they are merged.
        """
        gap = self.config.gap_ms
        for index in range(len(self.sessions) - 1, -1, -1):
            session = self.sessions[index]
            if session.start_time - gap <= page.timestamp <= session.end_time + gap:
                if page.timestamp < session.end_time:
                    logger.debug("Out-of-order page at %d placed in %s", page.timestamp, session.id)
                bisect.insort(session.pages, page, key=_timestamp)
                session.start_time = min(session.start_time, page.timestamp)
                session.end_time = max(session.end_time, page.timestamp)
                return self._merge_around(index)

        session = Session(
            id=self._id_factory(page.timestamp),
            start_time=page.timestamp,
            end_time=page.timestamp,
            pages=[page],
        )
        bisect.insort(self.sessions, session, key=lambda s: s.start_time)
        logger.debug("Opened session %s at %d", session.id, page.timestamp)
        return session

    def _merge_around(self, index: int) -> Session:
        gap = self.config.gap_ms
        sessions = self.sessions
        if index + 1 < len(sessions) and sessions[index + 1].start_time - sessions[index].end_time <= gap:
            following = sessions.pop(index + 1)
            sessions[index].pages.extend(following.pages)
            sessions[index].end_time = following.end_time
            logger.debug("Merged session %s into %s", following.id, sessions[index].id)
        if index > 0 and sessions[index].start_time - sessions[index - 1].end_time <= gap:
            current = sessions.pop(index)
            sessions[index - 1].pages.extend(current.pages)
            sessions[index - 1].end_time = current.end_time
            logger.debug("Merged session %s into %s", current.id, sessions[index - 1].id)
            index -= 1
        return sessions[index]


def _timestamp(page: PageEvent) -> int:
    return page.timestamp


def segment_sessions(
    pages: Iterable[PageEvent],
    config: SessionConfig | None = None,
    id_factory: Callable[[int], str] | None = None,
) -> list[Session]:
    """Split ``pages`` into sessions, sorting them by timestamp first."""
    builder = SessionBuilder(config, id_factory)
    for page in sorted(pages, key=lambda p: p.timestamp):
        builder.add(page)
    return builder.sessions


def annotate_session(session: Session, config: TitleConfig | None = None) -> Session:
    """Copy of ``session`` with ``inferred_title`` filled in."""
    return dataclasses.replace(
        session,
        pages=list(session.pages),
        inferred_title=infer_session_title(session, config),
    )
