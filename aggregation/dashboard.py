"""Dashboard aggregator.

Page-level composition of the three integrations. One call to build()
fetches issues, a commit diff, and recent deployments concurrently, then
derives everything else from those three results:

    vitals    active incidents (critical + warning), critical count,
              total events, recent deployments; status "alert" when any
              critical issue is open, "victory" otherwise
    timeline  the first 3 issues and first 2 deployments, newest first
    rollback  defaults for the rollback form, taken from the latest
              deployment ("dpl_demo" when there is none)

The three fetches are independent. Each one degrades to mock data on its
own, so one service being down never blanks the others.
"""

import asyncio
import logging

from core.config import DashboardTargets
from schemas.commit import CommitDiffQuery
from schemas.dashboard import DashboardSnapshot, SystemVitals, TimelineEvent, VitalMetric
from schemas.deployment import DeploymentList, DeploymentQuery, RollbackRequest
from schemas.issue import IssueQuery, IssueReport
from sre.actions import IncidentActions

logger = logging.getLogger(__name__)

ISSUE_LIMIT = 10
DEPLOYMENT_LIMIT = 5
TIMELINE_ISSUES = 3
TIMELINE_DEPLOYMENTS = 2
DEMO_DEPLOYMENT_ID = "dpl_demo"


class DashboardAggregator:
    """Builds a DashboardSnapshot from the incident actions."""

    def __init__(self, actions: IncidentActions, targets: DashboardTargets) -> None:
        self.actions = actions
        self.targets = targets

    async def build(self) -> DashboardSnapshot:
        # Actions never raise, so no task here cancels its siblings.
        async with asyncio.TaskGroup() as tg:
            threats_task = tg.create_task(
                self.actions.get_sentry_issues(IssueQuery(limit=ISSUE_LIMIT))
            )
            diff_task = tg.create_task(self.actions.get_github_commit_diff(CommitDiffQuery(
                owner=self.targets.github_owner,
                repo=self.targets.github_repo,
                commit_sha=self.targets.commit_sha,
            )))
            deployments_task = tg.create_task(self.actions.get_vercel_deployments(DeploymentQuery(
                project_name=self.targets.vercel_project,
                limit=DEPLOYMENT_LIMIT,
            )))

        threats = threats_task.result()
        diff = diff_task.result()
        deployments = deployments_task.result()

        logger.info(
            "Dashboard built: %d issues, %d deployments.",
            len(threats.issues),
            len(deployments.deployments),
        )

        return DashboardSnapshot(
            threats=threats,
            diff=diff,
            deployments=deployments,
            rollback=self._rollback_defaults(deployments),
            vitals=build_vitals(threats, deployments),
            timeline=build_timeline(threats, deployments),
        )

    def _rollback_defaults(self, deployments: DeploymentList) -> RollbackRequest:
        latest = deployments.deployments[0] if deployments.deployments else None
        return RollbackRequest(
            deployment_id=latest.id if latest else DEMO_DEPLOYMENT_ID,
            project_name=self.targets.vercel_project,
            target_version=latest.url if latest else "",
            reason="Monitoring for potential rollback scenarios",
        )


def build_vitals(threats: IssueReport, deployments: DeploymentList) -> SystemVitals:
    summary = threats.summary
    return SystemVitals(
        metrics=[
            VitalMetric(label="Active Incidents", value=summary.critical + summary.warning),
            VitalMetric(label="Critical Issues", value=summary.critical),
            VitalMetric(label="Total Events", value=summary.total_events),
            VitalMetric(label="Recent Deployments", value=len(deployments.deployments)),
        ],
        status="alert" if summary.critical > 0 else "victory",
    )


def build_timeline(threats: IssueReport, deployments: DeploymentList) -> list[TimelineEvent]:
    events = [
        TimelineEvent(
            title=issue.title,
            description=f"{issue.project} • {issue.severity.upper()} • {issue.count} events",
            timestamp=issue.last_seen,
            status="completed" if issue.severity == "resolved" else "failed",
            meta=f"{issue.affected_users} users affected",
        )
        for issue in threats.issues[:TIMELINE_ISSUES]
    ]
    events += [
        TimelineEvent(
            title=f"Deployment {deployment.id}",
            description=deployment.branch or deployment.project_name,
            timestamp=deployment.created_at,
            status="completed" if deployment.status == "READY" else "in-progress",
            meta=deployment.commit_sha or "",
        )
        for deployment in deployments.deployments[:TIMELINE_DEPLOYMENTS]
    ]
    return sorted(events, key=lambda e: e.timestamp, reverse=True)
