"""Group page visits by resource identity, within and across sessions."""

from __future__ import annotations

from typing import Iterable

from browsing_signals.activity.models import PageEvent, Session
from browsing_signals.resources.extractor import extract_resource_identifier
from browsing_signals.resources.models import ResourceIdentifier


def build_resource_map(
    page_events: Iterable[PageEvent],
    session_id: str,
) -> dict[str, ResourceIdentifier]:
    """Map identifier -> visits for one session's pages.

    Pages whose URL cannot be turned into an identifier are skipped.
    """
    resources: dict[str, ResourceIdentifier] = {}

    for page in page_events:
        extracted = extract_resource_identifier(page.url)
        if extracted is None:
            continue

        resource = resources.get(extracted.identifier)
        if resource is None:
            resources[extracted.identifier] = ResourceIdentifier(
                domain=extracted.domain,
                specificity=extracted.specificity,
                identifier=extracted.identifier,
                visit_count=1,
                first_visit=page.timestamp,
                last_visit=page.timestamp,
                session_ids={session_id},
                page_events=[page],
            )
            continue

        resource.visit_count += 1
        resource.first_visit = min(resource.first_visit, page.timestamp)
        resource.last_visit = max(resource.last_visit, page.timestamp)
        resource.page_events.append(page)

    return resources


def merge_resource_maps(
    target: dict[str, ResourceIdentifier],
    source: dict[str, ResourceIdentifier],
) -> dict[str, ResourceIdentifier]:
    """Fold ``source`` into ``target`` and return ``target``.

    Counts add, the visit window widens and session sets union, so the
    outcome is the same whatever order maps are merged in.
    """
    for identifier, resource in source.items():
        existing = target.get(identifier)
        target[identifier] = resource if existing is None else existing.merged(resource)
    return target


def aggregate_resources_across_sessions(sessions: Iterable[Session]) -> list[ResourceIdentifier]:
    """Combine every session's resources into one record per identifier."""
    combined: dict[str, ResourceIdentifier] = {}
    for session in sessions:
        merge_resource_maps(combined, build_resource_map(session.pages, session.id))
    return list(combined.values())
