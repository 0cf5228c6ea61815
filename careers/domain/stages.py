"""Human-readable pipeline stage labels for the candidate-facing pages."""

from __future__ import annotations

from typing import Optional, Sequence

from careers.domain.models import PipelineStage

DEFAULT_INTERVIEW_DURATION_MINUTES = 60

STANDARD_STAGE_LABELS: dict[str, str] = {
    "new": "New",
    "reviewed": "Reviewed",
    "interviewing": "Interviewing",
    "debrief": "Debrief",
    "offered": "Offered",
    "hired": "Hired",
    "rejected": "Rejected",
}


def resolve_stage_label(status: str, stages: Sequence[PipelineStage]) -> str:
    """Custom stage title for ``status`` if the job defines one, else the standard label."""
    for stage in stages:
        if stage.key == status:
            return stage.title
    return STANDARD_STAGE_LABELS.get(status, status)


def resolve_interview_duration(stage_title: Optional[str], stages: Sequence[PipelineStage]) -> int:
    if stage_title:
        for stage in stages:
            if stage.title == stage_title and stage.duration_minutes:
                return stage.duration_minutes
    if stages and stages[0].duration_minutes:
        return stages[0].duration_minutes
    return DEFAULT_INTERVIEW_DURATION_MINUTES


__all__ = [
    "DEFAULT_INTERVIEW_DURATION_MINUTES",
    "STANDARD_STAGE_LABELS",
    "resolve_stage_label",
    "resolve_interview_duration",
]
