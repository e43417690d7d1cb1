"""Dashboard schemas.

The dashboard is the page-level composition of the three integrations:
issues, one commit diff, recent deployments, plus values derived from them
(vitals, a merged timeline, and the defaults for a rollback form).
"""

from datetime import datetime
from typing import Literal

from schemas.base import WireModel
from schemas.commit import CommitDiff
from schemas.deployment import DeploymentList, RollbackRequest
from schemas.issue import IssueReport


class VitalMetric(WireModel):
    label: str
    value: int


class SystemVitals(WireModel):
    """Headline numbers. status is "alert" when any critical issue is open."""

    title: str = "System Vitals"
    metrics: list[VitalMetric]
    status: Literal["alert", "victory"]


class TimelineEvent(WireModel):
    title: str
    description: str
    timestamp: datetime
    status: Literal["completed", "failed", "in-progress"]
    meta: str = ""


class DashboardSnapshot(WireModel):
    """Everything the incident dashboard renders for one request."""

    threats: IssueReport
    diff: CommitDiff
    deployments: DeploymentList
    rollback: RollbackRequest
    vitals: SystemVitals
    timeline: list[TimelineEvent]
