"""Tests for the GitHub integration client."""

from core.config import GitHubConfig
from normalize.diff import DEBUG_PRINT_ADVISORY, REVIEW_RECOMMENDATION
from schemas.commit import CommitDiffQuery
from sre.integrations.github import GitHubClient

COMMIT_PATH = "/repos/acme/web/commits/abc123"

PATCH = (
    "@@ -10,4 +10,4 @@ export function submit() {\n"
    "   const data = collect();\n"
    "-  return post(data);\n"
    "+  console.log(data);\n"
    "+  return send(data);\n"
    "   }"
)


def make_commit(files: list[dict] | None = None) -> dict:
    return {
        "sha": "abc123def456",
        "html_url": "https://github.com/acme/web/commit/abc123def456",
        "commit": {
            "message": "Switch submit to send()",
            "author": {"name": "Dev", "email": "dev@acme.io", "date": "2024-11-15T09:00:00Z"},
        },
        "files": files if files is not None else [
            {"filename": "README.md", "additions": 1, "deletions": 0, "patch": "@@ -1 +1 @@\n+docs"},
            {"filename": "src/submit.ts", "additions": 2, "deletions": 1, "patch": PATCH},
        ],
    }


def query(**overrides) -> CommitDiffQuery:
    return CommitDiffQuery(**{"owner": "acme", "repo": "web", "commit_sha": "abc123", **overrides})


class TestGitHubClientLive:
    async def test_builds_request(self, service, github_config):
        service.on("GET", COMMIT_PATH, json=make_commit())
        await GitHubClient(github_config, transport=service.transport).get_commit_diff(query())

        (request,) = service.calls("GET", COMMIT_PATH)
        assert request.headers["Authorization"] == "token ghp_test"
        assert request.headers["Accept"] == "application/vnd.github.v3+json"

    async def test_defaults_to_first_file(self, service, github_config):
        service.on("GET", COMMIT_PATH, json=make_commit())
        diff = await GitHubClient(github_config, transport=service.transport).get_commit_diff(query())

        assert diff.diff.file_name == "README.md"
        assert diff.diff.language == "text"

    async def test_named_file(self, service, github_config):
        service.on("GET", COMMIT_PATH, json=make_commit())
        diff = await GitHubClient(github_config, transport=service.transport).get_commit_diff(
            query(file_name="src/submit.ts")
        )

        assert diff.commit.sha == "abc123def456"
        assert diff.commit.author == "dev@acme.io"
        assert diff.commit.branch == "main"
        assert diff.commit.url.endswith("abc123def456")
        assert diff.diff.language == "typescript"
        assert (diff.diff.additions, diff.diff.deletions) == (2, 1)
        assert [(c.line_number, c.type) for c in diff.diff.changes] == [
            (10, "context"), (11, "remove"), (11, "add"), (12, "add"), (13, "context"),
        ]
        assert diff.analysis.severity == "medium"
        assert diff.analysis.potential_issues == [DEBUG_PRINT_ADVISORY]
        assert diff.analysis.recommendation == REVIEW_RECOMMENDATION

    async def test_file_without_patch_has_no_changes(self, service, github_config):
        service.on("GET", COMMIT_PATH, json=make_commit([{"filename": "logo.png", "additions": 0, "deletions": 0}]))
        diff = await GitHubClient(github_config, transport=service.transport).get_commit_diff(query())
        assert diff.diff.changes == []


class TestGitHubClientFallback:
    async def test_missing_token_returns_mock_without_request(self, service):
        client = GitHubClient(GitHubConfig(), transport=service.transport)
        diff = await client.get_commit_diff(query())

        assert service.requests == []
        assert diff.commit.sha == "abc123f"
        assert diff.analysis.severity == "high"

    async def test_unknown_file_returns_mock(self, service, github_config):
        service.on("GET", COMMIT_PATH, json=make_commit())
        diff = await GitHubClient(github_config, transport=service.transport).get_commit_diff(
            query(file_name="does/not/exist.py")
        )
        assert diff.commit.sha == "abc123f"

    async def test_commit_without_files_returns_mock(self, service, github_config):
        service.on("GET", COMMIT_PATH, json=make_commit(files=[]))
        diff = await GitHubClient(github_config, transport=service.transport).get_commit_diff(query())
        assert diff.diff.file_name == "src/utils/formHelpers.ts"

    async def test_not_found_returns_mock(self, service, github_config):
        diff = await GitHubClient(github_config, transport=service.transport).get_commit_diff(
            query(commit_sha="missing")
        )
        assert len(service.requests) == 1
        assert diff.commit.sha == "abc123f"
