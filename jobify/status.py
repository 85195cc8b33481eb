"""Tri-state summary of a Job's reported conditions."""

from enum import Enum
from typing import Iterable, Optional


class JobState(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def label(self) -> str:
        return _STATE_LABELS[self]


_STATE_LABELS = {
    JobState.ACTIVE: "Active ⏳",
    JobState.COMPLETED: "Completed ✅",
    JobState.FAILED: "Failed ❌",
}

# Only the marker, used in compact job lists
STATE_MARKERS = {
    JobState.ACTIVE: "⏳",
    JobState.COMPLETED: "✅",
    JobState.FAILED: "❌",
}


def classify_conditions(conditions: Optional[Iterable]) -> JobState:
    """First true Complete or Failed condition wins; otherwise the job is active."""
    for condition in conditions or []:
        if condition.status != "True":
            continue
        if condition.type == "Complete":
            return JobState.COMPLETED
        if condition.type == "Failed":
            return JobState.FAILED
    return JobState.ACTIVE


def classify_job(job) -> JobState:
    if job.status is None:
        return JobState.ACTIVE
    return classify_conditions(job.status.conditions)
