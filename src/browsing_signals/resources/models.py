"""Data models for the resources module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from browsing_signals.activity.models import PageEvent

ResourceSpecificity = Literal["homepage", "category", "specific", "deep"]


@dataclass(frozen=True)
class ExtractedResource:
    """The stable identity of a URL, before any visits are counted."""

    domain: str
    specificity: ResourceSpecificity
    identifier: str


@dataclass
class ResourceIdentifier:
    """Visit history of one normalized resource, possibly across sessions."""

    domain: str
    specificity: ResourceSpecificity
    identifier: str
    visit_count: int
    first_visit: int
    last_visit: int
    session_ids: set[str] = field(default_factory=set)
    page_events: list[PageEvent] = field(default_factory=list)

    @property
    def span_ms(self) -> int:
        return self.last_visit - self.first_visit

    def merged(self, other: ResourceIdentifier) -> ResourceIdentifier:
        """Combine two records of the same identifier into a new one.

        Page events are ordered by timestamp so the result does not depend
        on which record came first.
        """
        return ResourceIdentifier(
            domain=self.domain,
            specificity=self.specificity,
            identifier=self.identifier,
            visit_count=self.visit_count + other.visit_count,
            first_visit=min(self.first_visit, other.first_visit),
            last_visit=max(self.last_visit, other.last_visit),
            session_ids=self.session_ids | other.session_ids,
            page_events=sorted(
                self.page_events + other.page_events,
                key=lambda p: p.timestamp,
            ),
        )
