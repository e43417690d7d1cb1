"""Deployment and rollback schemas.

Deployment is the normalized Vercel deployment record. RollbackRequest and
RollbackResult are the input and output of the one state-changing operation
in the system.
"""

from datetime import datetime, timezone
from typing import Literal

from pydantic import Field, model_validator

from schemas.base import WireModel

RollbackStatus = Literal["initiated", "in-progress", "completed", "failed"]


class DeploymentQuery(WireModel):
    project_name: str
    limit: int = Field(default=5, ge=1)


class Deployment(WireModel):
    """One normalized deployment.

    Attributes:
        id: Vercel deployment uid (e.g. "dpl_8f2k...").
        project_name: Project the deployment belongs to.
        status: Platform state string as reported ("READY", "ERROR",
            "BUILDING", ...). Kept as a plain string because the platform
            adds states over time.
        url: Absolute https URL of the deployment.
        created_at: Creation time, converted from epoch milliseconds.
        commit_sha: Git commit the deployment was built from, if known.
        branch: Git ref the deployment was built from, if known.
    """

    id: str
    project_name: str
    status: str
    url: str
    created_at: datetime
    commit_sha: str | None = None
    branch: str | None = None


class DeploymentList(WireModel):
    deployments: list[Deployment]


class RollbackRequest(WireModel):
    """Input to a rollback.

    Attributes:
        deployment_id: The deployment being rolled back from.
        project_name: Vercel project ID or name.
        target_version: Informational only. The target is always the first
            READY deployment in API order that is not deployment_id.
        reason: Free text recorded in the log.
    """

    deployment_id: str
    project_name: str
    target_version: str | None = None
    reason: str | None = None


class RollbackResult(WireModel):
    """Terminal outcome of a rollback.

    The workflow is synchronous, so only two shapes are valid: a success at
    status "completed" with progress 100, or a failure at status "failed"
    with progress 0. "initiated" and "in-progress" exist for callers that
    poll and render intermediate states themselves.
    """

    success: bool
    deployment_id: str
    previous_deployment_id: str | None = None
    status: RollbackStatus
    progress: int = Field(ge=0, le=100)
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def _check_terminal_state(self) -> "RollbackResult":
        if self.success and (self.status != "completed" or self.progress != 100):
            raise ValueError("a successful rollback must be completed at 100% progress")
        if not self.success and (self.status != "failed" or self.progress != 0):
            raise ValueError("a failed rollback must be failed at 0% progress")
        return self

    @classmethod
    def completed(
        cls, deployment_id: str, previous_deployment_id: str, message: str
    ) -> "RollbackResult":
        return cls(
            success=True,
            deployment_id=deployment_id,
            previous_deployment_id=previous_deployment_id,
            status="completed",
            progress=100,
            message=message,
        )

    @classmethod
    def failed(cls, deployment_id: str, message: str) -> "RollbackResult":
        return cls(
            success=False,
            deployment_id=deployment_id,
            status="failed",
            progress=0,
            message=message,
        )
