"""Issue schemas.

Strict, normalized view of Sentry issues. Raw Sentry payloads never reach
these models directly: normalize/issues.py does all the tolerant field
access and hands over complete values.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from schemas.base import WireModel

IssueSeverity = Literal["critical", "warning", "resolved"]


class IssueQuery(WireModel):
    """Input to an issue fetch.

    Attributes:
        project_id: Sentry project slug. Overrides SENTRY_PROJECT_SLUG when set.
        severity: Accepted for the tool contract. The upstream query is
            always "is:unresolved" and the result is not filtered by it.
        limit: Maximum number of issues kept from the response.
    """

    project_id: str | None = None
    severity: IssueSeverity | None = None
    limit: int = Field(default=10, ge=1)


class Issue(WireModel):
    """One normalized error-tracking issue.

    Attributes:
        id: Sentry issue ID.
        title: Issue title, falling back to the metadata type, then
            "Unknown error".
        severity: "critical" for error/fatal levels, "warning" otherwise.
            "resolved" only arrives through explicit resolution input.
        count: Total events recorded for the issue.
        last_seen: When Sentry last saw an event for this issue.
        project: Project slug the issue was fetched from.
        affected_users: Distinct users that hit the issue.
        stack_trace: Best available stack trace text. Never empty.
    """

    id: str
    title: str
    severity: IssueSeverity
    count: int = 0
    last_seen: datetime
    project: str
    affected_users: int = 0
    stack_trace: str


class IssueSummary(WireModel):
    """Severity counts and event total folded from a list of issues.

    resolved is always 0 from a live fetch because the upstream query only
    returns unresolved issues. The field is kept so the dashboard contract
    stays stable.
    """

    critical: int = 0
    warning: int = 0
    resolved: int = 0
    total_events: int = 0


class IssueReport(WireModel):
    """Result of one issue fetch, live or mock."""

    issues: list[Issue]
    summary: IssueSummary
    timestamp: datetime
