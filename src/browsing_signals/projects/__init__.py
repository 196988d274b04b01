"""Project candidate scoring and lifecycle, and project detection from history."""

from browsing_signals.projects.models import (
    DetectedProject,
    NotificationRecord,
    ProjectCandidate,
    ScoreBreakdown,
)
from browsing_signals.projects.candidates import (
    CandidateDetector,
    calculate_candidate_score,
    dismiss_candidate,
    mark_candidate_notified,
    promote_candidate,
    ready_candidates,
    snooze_candidate,
)
from browsing_signals.projects.detection import (
    ProjectCluster,
    cluster_sessions,
    detect_projects,
    project_status,
    score_cluster,
)

__all__ = [
    "DetectedProject",
    "ProjectCandidate",
    "ScoreBreakdown",
    "NotificationRecord",
    "CandidateDetector",
    "calculate_candidate_score",
    "dismiss_candidate",
    "mark_candidate_notified",
    "promote_candidate",
    "ready_candidates",
    "snooze_candidate",
    "ProjectCluster",
    "cluster_sessions",
    "detect_projects",
    "project_status",
    "score_cluster",
]
