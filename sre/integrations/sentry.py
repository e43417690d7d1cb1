"""Sentry integration client.

Fetches unresolved issues for one project and normalizes them into an
IssueReport: the issue list plus a severity summary.

Live mode: SENTRY_AUTH_TOKEN, SENTRY_ORG, and a project (SENTRY_PROJECT_SLUG
           or an explicit project_id on the query) are all set.
Mock mode: anything missing. get_issues() returns the fixed mock report
           without touching the network.

Sentry API reference: https://docs.sentry.io/api/events/list-a-projects-issues/
"""

import logging
from datetime import datetime, timezone

import httpx

from core.config import SentryConfig
from core.fallback import FallbackPolicy
from normalize.issues import normalize_issue, summarize_issues
from schemas.issue import IssueQuery, IssueReport
from sre.integrations.errors import IntegrationError
from sre.integrations.mocks import mock_issue_report

logger = logging.getLogger(__name__)

STATS_PERIOD = "14d"
UNRESOLVED_QUERY = "is:unresolved"


class SentryClient:
    """Error-tracking client.

    Attributes:
        config: Resolved Sentry credentials and project scope.
        get_issues: FallbackPolicy around fetch_issues(). Never raises.
    """

    def __init__(
        self,
        config: SentryConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialise the client.

        Args:
            config: Sentry section of IntegrationConfig.
            transport: Optional httpx transport. Tests pass an
                httpx.MockTransport here; production leaves it None.
        """
        self.config = config
        self._transport = transport
        self.get_issues: FallbackPolicy[[IssueQuery], IssueReport] = FallbackPolicy(
            "Sentry",
            producer=self.fetch_issues,
            mock=lambda query: mock_issue_report(),
            is_configured=lambda query: config.is_configured(query.project_id),
        )

    async def fetch_issues(self, query: IssueQuery) -> IssueReport:
        """Fetch unresolved issues over the last 14 days.

        Raises:
            httpx.HTTPStatusError: Sentry returned a non-2xx response.
            IntegrationError: The body was not a JSON array.
        """
        project = query.project_id or self.config.project_slug
        headers = {"Authorization": f"Bearer {self.config.auth_token}"}

        async with httpx.AsyncClient(
            base_url=self.config.api_base,
            headers=headers,
            timeout=self.config.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.get(
                f"/projects/{self.config.org}/{project}/issues/",
                params={"statsPeriod": STATS_PERIOD, "query": UNRESOLVED_QUERY},
            )
            response.raise_for_status()
            raw_issues = response.json()

        if not isinstance(raw_issues, list):
            raise IntegrationError(
                f"Sentry returned {type(raw_issues).__name__}, expected a list of issues"
            )

        issues = [normalize_issue(raw, project) for raw in raw_issues[: query.limit]]

        logger.info("Fetched %d Sentry issues for %s/%s.", len(issues), self.config.org, project)

        return IssueReport(
            issues=issues,
            summary=summarize_issues(issues),
            timestamp=datetime.now(timezone.utc),
        )
