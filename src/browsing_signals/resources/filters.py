"""Decide which aggregated resources are worth treating as project signals."""

from __future__ import annotations

from typing import Iterable

from browsing_signals.config import DAY_MS, ResourceFilterConfig
from browsing_signals.resources.models import ResourceIdentifier


def filter_meaningful_resources(
    resources: Iterable[ResourceIdentifier],
    min_visits: int | None = None,
    min_sessions: int | None = None,
) -> list[ResourceIdentifier]:
    """Drop homepages and resources below the visit or session thresholds."""
    defaults = ResourceFilterConfig()
    min_visits = defaults.min_visits if min_visits is None else min_visits
    min_sessions = defaults.min_sessions if min_sessions is None else min_sessions

    return [
        r for r in resources
        if r.specificity != "homepage"
        and r.visit_count >= min_visits
        and len(r.session_ids) >= min_sessions
    ]


def is_routine_resource(
    resource: ResourceIdentifier,
    config: ResourceFilterConfig | None = None,
) -> bool:
    """Whether a resource is visited habitually (daily mail, feeds) rather than for a project.

    Spans shorter than ``routine_min_span_days`` are never judged routine.
    """
    cfg = config or ResourceFilterConfig()
    span_days = resource.span_ms / DAY_MS
    if span_days < cfg.routine_min_span_days or span_days <= 0:
        return False
    return resource.visit_count / span_days > cfg.routine_visits_per_day
