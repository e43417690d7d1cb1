"""Schema validation tests.

These tests verify that the wire models accept valid data, reject invalid
data, enforce field constraints, and serialize with camelCase keys. No
credentials or external services required.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from schemas.commit import ChangeLine, FileDiff
from schemas.deployment import Deployment, RollbackRequest, RollbackResult
from schemas.issue import Issue, IssueQuery


# ── Helpers ──────────────────────────────────────────────────────────────────

def make_issue(**overrides) -> Issue:
    defaults = dict(
        id="1",
        title="TypeError: x is undefined",
        severity="critical",
        count=3,
        last_seen=datetime(2024, 11, 15, tzinfo=timezone.utc),
        project="web",
        affected_users=2,
        stack_trace="at handler",
    )
    return Issue(**{**defaults, **overrides})


def make_change(number: int) -> ChangeLine:
    return ChangeLine(line_number=number, type="add", content=f"line {number}")


# ── Issue ────────────────────────────────────────────────────────────────────

class TestIssue:
    def test_serializes_camel_case(self):
        data = make_issue().model_dump(by_alias=True)
        assert data["lastSeen"] == datetime(2024, 11, 15, tzinfo=timezone.utc)
        assert data["affectedUsers"] == 2
        assert data["stackTrace"] == "at handler"

    def test_accepts_camel_case_input(self):
        issue = Issue.model_validate({
            "id": "1", "title": "t", "severity": "warning", "count": 1,
            "lastSeen": "2024-11-15T00:00:00Z", "project": "web",
            "affectedUsers": 4, "stackTrace": "s",
        })
        assert issue.affected_users == 4

    def test_unknown_severity_rejected(self):
        with pytest.raises(ValidationError):
            make_issue(severity="info")


class TestIssueQuery:
    def test_defaults(self):
        query = IssueQuery()
        assert query.project_id is None
        assert query.limit == 10

    def test_zero_limit_rejected(self):
        with pytest.raises(ValidationError):
            IssueQuery(limit=0)


# ── FileDiff ─────────────────────────────────────────────────────────────────

class TestFileDiff:
    def test_twenty_changes_accepted(self):
        diff = FileDiff(file_name="a.py", language="python", changes=[make_change(i) for i in range(20)])
        assert len(diff.changes) == 20

    def test_more_than_twenty_changes_rejected(self):
        with pytest.raises(ValidationError):
            FileDiff(file_name="a.py", language="python", changes=[make_change(i) for i in range(21)])

    def test_unknown_change_type_rejected(self):
        with pytest.raises(ValidationError):
            ChangeLine(line_number=1, type="modify", content="x")


# ── Deployment / rollback ────────────────────────────────────────────────────

class TestDeployment:
    def test_optional_commit_fields(self):
        deployment = Deployment(
            id="dpl_1", project_name="web", status="QUEUED",
            url="https://web.vercel.app", created_at="2024-11-15T00:00:00Z",
        )
        assert deployment.commit_sha is None
        assert deployment.model_dump(by_alias=True)["projectName"] == "web"


class TestRollbackRequest:
    def test_accepts_camel_case_body(self):
        request = RollbackRequest.model_validate({
            "deploymentId": "dpl_1", "projectName": "web", "targetVersion": "v2",
        })
        assert request.deployment_id == "dpl_1"
        assert request.reason is None


class TestRollbackResult:
    def test_completed(self):
        result = RollbackResult.completed("dpl_1", "dpl_0", "done")
        assert (result.success, result.status, result.progress) == (True, "completed", 100)
        assert result.timestamp.tzinfo is not None

    def test_failed(self):
        result = RollbackResult.failed("dpl_1", "Rollback failed: nope")
        assert (result.success, result.status, result.progress) == (False, "failed", 0)
        assert result.previous_deployment_id is None

    @pytest.mark.parametrize(
        "success,status,progress",
        [
            (True, "completed", 50),
            (True, "in-progress", 100),
            (False, "failed", 100),
            (False, "completed", 0),
        ],
    )
    def test_inconsistent_states_rejected(self, success, status, progress):
        with pytest.raises(ValidationError):
            RollbackResult(
                success=success, deployment_id="dpl_1", status=status,
                progress=progress, message="m",
            )

    def test_progress_bounds(self):
        with pytest.raises(ValidationError):
            RollbackResult(success=True, deployment_id="d", status="completed", progress=101, message="m")
