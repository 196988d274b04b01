"""Recover projects from past sessions by clustering the resources they share.

Meaningful, non-routine resources are visited in order. Each one pulls its
not-yet-claimed sessions into the first cluster that already holds one of
its sessions or ended within ``max_cluster_days`` of its last visit, or
starts a new cluster. Clusters are then scored, named and gated.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from browsing_signals.activity.models import Session
from browsing_signals.config import (
    DAY_MS,
    HOUR_MS,
    PROJECT_STOPWORDS,
    ProjectDetectionConfig,
    ResourceFilterConfig,
)
from browsing_signals.projects.models import DetectedProject, ProjectStatus
from browsing_signals.resources.aggregator import aggregate_resources_across_sessions
from browsing_signals.resources.filters import filter_meaningful_resources, is_routine_resource
from browsing_signals.resources.models import ResourceIdentifier

logger = logging.getLogger(__name__)

_WORD_SPLIT = re.compile(r"[\s\-_.,;:!?()\[\]{}'\"]+")
_TLD_SUFFIX = re.compile(r"\.(com|org|net|dev|io)$")

FALLBACK_PROJECT_NAME = "Research Project"


@dataclass
class ProjectCluster:
    """Sessions grouped around shared resources, before gating."""

    resources: list[ResourceIdentifier]
    sessions: list[Session]
    start_date: int
    end_date: int
    keywords: list[str] = field(default_factory=list)
    top_domains: list[str] = field(default_factory=list)
    score: int = 0
    dominant_label: str | None = None

    @property
    def session_ids(self) -> list[str]:
        return [s.id for s in self.sessions]


def cluster_sessions(
    sessions: Iterable[Session],
    config: ProjectDetectionConfig | None = None,
    filter_config: ResourceFilterConfig | None = None,
) -> list[ProjectCluster]:
    """Group sessions into clusters; every session lands in at most one."""
    cfg = config or ProjectDetectionConfig()
    sessions = list(sessions)

    resources = [
        r for r in filter_meaningful_resources(
            aggregate_resources_across_sessions(sessions),
            min_visits=cfg.min_resource_visits,
            min_sessions=cfg.min_sessions,
        )
        if not is_routine_resource(r, filter_config)
    ]

    clusters: list[ProjectCluster] = []
    assigned: set[str] = set()
    max_gap_ms = cfg.max_cluster_days * DAY_MS

    for resource in resources:
        unassigned = [
            s for s in sessions
            if s.id in resource.session_ids and s.id not in assigned
        ]
        if len(unassigned) < cfg.min_sessions:
            continue

        target = next(
            (
                c for c in clusters
                if any(s.id in resource.session_ids for s in c.sessions)
                or abs(c.end_date - resource.last_visit) <= max_gap_ms
            ),
            None,
        )
        if target is None:
            clusters.append(ProjectCluster(
                resources=[resource],
                sessions=unassigned,
                start_date=resource.first_visit,
                end_date=resource.last_visit,
            ))
        else:
            target.resources.append(resource)
            target.sessions.extend(unassigned)
            target.start_date = min(target.start_date, resource.first_visit)
            target.end_date = max(target.end_date, resource.last_visit)
        assigned.update(s.id for s in unassigned)

    logger.debug("Clustered %d sessions into %d clusters", len(sessions), len(clusters))
    return clusters


def score_cluster(cluster: ProjectCluster, config: ProjectDetectionConfig | None = None) -> int:
    """Score a cluster out of 100 and record its dominant label, if any.

    Up to 40 for well-visited specific or deep resources, 30 for the time
    span, 20 for the session count and 10 for consistent session labels.
    """
    cfg = config or ProjectDetectionConfig()
    score = 0

    focused = [
        r for r in cluster.resources
        if r.specificity in ("specific", "deep") and r.visit_count >= cfg.specific_visit_floor
    ]
    score += min(len(focused) * 8, 40)

    duration_ms = cluster.end_date - cluster.start_date
    duration_days = duration_ms / DAY_MS
    if duration_ms / HOUR_MS < cfg.min_duration_hours:
        score += 5
    elif 2 <= duration_days <= 14:
        score += 30
    elif 14 < duration_days <= 30:
        score += 20
    else:
        score += 10

    session_count = len(cluster.sessions)
    if session_count >= 5:
        score += 20
    elif session_count >= 3:
        score += 15
    elif session_count == 2:
        score += 10

    labels = [s.label_id for s in cluster.sessions if s.label_id]
    if len(set(labels)) == 1 and len(labels) >= 2:
        score += 10
        cluster.dominant_label = labels[0]
    elif labels:
        score += 5

    return min(score, 100)


def extract_project_keywords(sessions: Iterable[Session], limit: int = 10) -> list[str]:
    """Most frequent title words across the sessions' pages."""
    counts: Counter[str] = Counter()
    for session in sessions:
        for page in session.pages:
            if not page.title:
                continue
            counts.update(
                w for w in _WORD_SPLIT.split(page.title.lower())
                if len(w) > 3 and w not in PROJECT_STOPWORDS
            )
    return [word for word, _ in counts.most_common(limit)]


def top_domains(resources: Iterable[ResourceIdentifier], limit: int = 5) -> list[str]:
    """Domains ordered by their total visits across ``resources``."""
    counts: Counter[str] = Counter()
    for resource in resources:
        counts[resource.domain] += resource.visit_count
    return [domain for domain, _ in counts.most_common(limit)]


def project_name(keywords: list[str], domains: list[str]) -> str:
    if keywords:
        return keywords[0][:1].upper() + keywords[0][1:]
    if domains:
        base = _TLD_SUFFIX.sub("", domains[0])
        return base[:1].upper() + base[1:] + " Project"
    return FALLBACK_PROJECT_NAME


def project_status(
    end_date: int,
    now: int,
    config: ProjectDetectionConfig | None = None,
) -> ProjectStatus:
    """``active`` within ``active_days`` of the last visit, ``stale`` until
    ``completed_days``, ``completed`` after that."""
    cfg = config or ProjectDetectionConfig()
    idle_days = (now - end_date) / DAY_MS
    if idle_days <= cfg.active_days:
        return "active"
    if idle_days <= cfg.completed_days:
        return "stale"
    return "completed"


def detect_projects(
    sessions: Iterable[Session],
    config: ProjectDetectionConfig | None = None,
    filter_config: ResourceFilterConfig | None = None,
    now: int | None = None,
) -> list[DetectedProject]:
    """Cluster ``sessions`` and return the clusters that qualify as projects.

    A cluster qualifies with at least ``min_score``, ``min_sessions``
    sessions and ``min_resources`` resources. Results keep cluster order.
    """
    cfg = config or ProjectDetectionConfig()
    sessions = list(sessions)
    if len(sessions) < cfg.min_sessions:
        return []
    now = int(time.time() * 1000) if now is None else now

    projects: list[DetectedProject] = []
    for cluster in cluster_sessions(sessions, cfg, filter_config):
        cluster.keywords = extract_project_keywords(cluster.sessions)
        cluster.top_domains = top_domains(cluster.resources)
        cluster.score = score_cluster(cluster, cfg)

        if (
            cluster.score < cfg.min_score
            or len(cluster.sessions) < cfg.min_sessions
            or len(cluster.resources) < cfg.min_resources
        ):
            logger.debug(
                "Dropping cluster of %d sessions (score %d, %d resources)",
                len(cluster.sessions), cluster.score, len(cluster.resources),
            )
            continue

        projects.append(DetectedProject(
            id=f"project-{now}-{uuid.uuid4().hex[:9]}",
            name=project_name(cluster.keywords, cluster.top_domains),
            start_date=cluster.start_date,
            end_date=cluster.end_date,
            session_ids=cluster.session_ids,
            keywords=cluster.keywords,
            top_domains=cluster.top_domains,
            status=project_status(cluster.end_date, now, cfg),
            created_at=now,
            score=cluster.score,
            dominant_label=cluster.dominant_label,
        ))

    logger.info("Detected %d projects from %d sessions", len(projects), len(sessions))
    return projects
