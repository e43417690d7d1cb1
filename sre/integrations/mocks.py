"""Deterministic mock data.

Returned by the clients when credentials are missing or a read call fails,
so read surfaces always have something to render. The content is fixed
apart from timestamps, which are taken at call time.

The scenario is a single story: a function was renamed in one commit, one
call site was missed, and production started throwing ReferenceErrors.
"""

from datetime import datetime, timedelta, timezone

from schemas.commit import ChangeLine, CommitDiff, CommitDiffQuery, CommitInfo, DiffAnalysis, FileDiff
from schemas.deployment import Deployment, DeploymentList, DeploymentQuery, RollbackRequest, RollbackResult
from schemas.issue import Issue, IssueReport, IssueSummary

MOCK_PREVIOUS_DEPLOYMENT_ID = "dpl_mock_previous"

_MOCK_STACK_TRACE = """ReferenceError: myUndefinedFunction is not defined
    at handleSubmit (src/components/ContactForm.tsx:45:12)
    at HTMLButtonElement.callCallback (react-dom.production.min.js:3945:14)
    at Object.invokeGuardedCallbackDev (react-dom.development.js:3994:16)
    at invokeGuardedCallback (react-dom.production.min.js:4056:31)
    at executeDispatch (react-dom.production.min.js:8551:3)

Likely cause: Function was renamed from 'validateAndSubmit' to 'handleFormValidation' in commit abc123f but one call site was missed.
File: src/components/ContactForm.tsx, Line 45
Suggested fix: Import and use 'handleFormValidation' instead or restore 'myUndefinedFunction' as an alias."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def mock_issue_report() -> IssueReport:
    now = _now()
    return IssueReport(
        issues=[
            Issue(
                id="94486645",
                title="ReferenceError: myUndefinedFunction is not defined",
                severity="critical",
                count=6,
                last_seen=now,
                project="javascript",
                affected_users=5,
                stack_trace=_MOCK_STACK_TRACE,
            ),
        ],
        summary=IssueSummary(critical=1, warning=0, resolved=0, total_events=6),
        timestamp=now,
    )


def mock_commit_diff(query: CommitDiffQuery | None = None) -> CommitDiff:
    def line(number: int, type_: str, content: str) -> ChangeLine:
        return ChangeLine(line_number=number, type=type_, content=content)

    return CommitDiff(
        commit=CommitInfo(
            sha="abc123f",
            message="Refactor: Rename validateAndSubmit to handleFormValidation for clarity",
            author="dev@example.com",
            date=_now() - timedelta(hours=2),
            branch="main",
            url="https://github.com/example/repo/commit/abc123f",
        ),
        diff=FileDiff(
            file_name="src/utils/formHelpers.ts",
            language="typescript",
            additions=3,
            deletions=3,
            changes=[
                line(12, "remove", "export function validateAndSubmit(data: FormData) {"),
                line(13, "remove", "  // Validate form data"),
                line(14, "remove", "  return apiClient.post('/submit', data);"),
                line(12, "add", "export function handleFormValidation(data: FormData) {"),
                line(13, "add", "  // Validate form data before submission"),
                line(14, "add", "  return apiClient.post('/submit', data);"),
                line(15, "context", "}"),
            ],
        ),
        analysis=DiffAnalysis(
            severity="high",
            potential_issues=[
                "Function renamed but not all call sites updated",
                "Missing import update in ContactForm.tsx:45",
                "Breaking change deployed without backward compatibility",
            ],
            recommendation="Add backward-compatible alias or update all references before deploying",
        ),
    )


def mock_deployment(deployment_id: str, project_name: str = "demo-project") -> Deployment:
    return Deployment(
        id=deployment_id,
        project_name=project_name,
        status="READY",
        url=f"https://{project_name}.vercel.app",
        created_at=_now(),
        commit_sha="mock_sha_123",
        branch="main",
    )


def mock_deployment_list(query: DeploymentQuery) -> DeploymentList:
    return DeploymentList(deployments=[mock_deployment("dpl_mock_current", query.project_name)])


def mock_rollback_result(request: RollbackRequest) -> RollbackResult:
    return RollbackResult.completed(
        deployment_id=request.deployment_id,
        previous_deployment_id=MOCK_PREVIOUS_DEPLOYMENT_ID,
        message=(
            f"Mock rollback completed for {request.project_name}. "
            "Set VERCEL_TOKEN in .env for real rollbacks."
        ),
    )
