"""Tool actions.

The four operations exposed to the calling layer (chat tool registry, HTTP
API, CLI). Each wraps one client call in a last-resort safety net: the
clients already degrade to mock data, so reaching one of these except
blocks means a bug in normalization or schema validation, not a service
outage. Even then the caller gets a well-formed, clearly empty response.
"""

import logging
from datetime import datetime, timezone

import httpx

from core.config import IntegrationConfig
from schemas.commit import CommitDiff, CommitDiffQuery, CommitInfo, DiffAnalysis, FileDiff
from schemas.deployment import Deployment, DeploymentList, DeploymentQuery, RollbackRequest, RollbackResult
from schemas.issue import IssueQuery, IssueReport, IssueSummary
from sre.integrations.github import GitHubClient
from sre.integrations.sentry import SentryClient
from sre.integrations.vercel import VercelClient
from sre.rollback import RollbackOrchestrator

logger = logging.getLogger(__name__)


class IncidentActions:
    """Wires the three clients and the rollback orchestrator from one config.

    Attributes:
        sentry: Error-tracking client.
        github: Source-control client.
        vercel: Deployment-platform client.
        rollbacks: Rollback workflow on top of vercel.
    """

    def __init__(
        self,
        config: IntegrationConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Build every client from a resolved config.

        Args:
            config: Output of IntegrationConfig.from_env().
            transport: Optional httpx transport shared by all clients.
        """
        self.sentry = SentryClient(config.sentry, transport=transport)
        self.github = GitHubClient(config.github, transport=transport)
        self.vercel = VercelClient(config.vercel, transport=transport)
        self.rollbacks = RollbackOrchestrator(self.vercel)

    async def get_sentry_issues(self, query: IssueQuery) -> IssueReport:
        try:
            return await self.sentry.get_issues(query)
        except Exception as exc:
            logger.error("get_sentry_issues failed: %r", exc)
            return IssueReport(issues=[], summary=IssueSummary(), timestamp=datetime.now(timezone.utc))

    async def get_github_commit_diff(self, query: CommitDiffQuery) -> CommitDiff:
        try:
            return await self.github.get_commit_diff(query)
        except Exception as exc:
            logger.error("get_github_commit_diff failed: %r", exc)
            return CommitDiff(
                commit=CommitInfo(
                    sha=query.commit_sha,
                    message="Error fetching commit",
                    author="unknown",
                    date=datetime.now(timezone.utc),
                    branch="main",
                ),
                diff=FileDiff(file_name=query.file_name or "unknown", language="text"),
                analysis=DiffAnalysis(
                    severity="low",
                    potential_issues=[],
                    recommendation="Unable to analyze changes at this time.",
                ),
            )

    async def get_vercel_deployments(self, query: DeploymentQuery) -> DeploymentList:
        try:
            return await self.vercel.get_deployments(query)
        except Exception as exc:
            logger.error("get_vercel_deployments failed: %r", exc)
            return DeploymentList(deployments=[])

    async def get_vercel_deployment(self, deployment_id: str) -> Deployment:
        # Mock data on failure comes from the client; nothing sensible to
        # return beyond that, so unexpected errors propagate to the API layer.
        return await self.vercel.get_deployment(deployment_id)

    async def execute_vercel_rollback(self, request: RollbackRequest) -> RollbackResult:
        try:
            return await self.rollbacks.rollback(request)
        except Exception as exc:
            logger.error("execute_vercel_rollback failed: %r", exc)
            return RollbackResult.failed(
                deployment_id=request.deployment_id,
                message=f"Failed to rollback: {exc}",
            )
