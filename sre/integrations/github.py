"""GitHub integration client.

Fetches one commit and turns one of its files into a CommitDiff: commit
metadata, parsed line-level changes, and pattern-based advisories.

Live mode: GITHUB_TOKEN is set.
Mock mode: GITHUB_TOKEN unset, or the fetch failed. get_commit_diff()
           returns the fixed mock diff.

GitHub API reference: https://docs.github.com/en/rest/commits/commits#get-a-commit
"""

import logging

import httpx

from core.config import GitHubConfig
from core.fallback import FallbackPolicy
from normalize.diff import REVIEW_RECOMMENDATION, analyze_changes, language_for_filename
from normalize.patch import parse_patch
from schemas.commit import CommitDiff, CommitDiffQuery, CommitInfo, DiffAnalysis, FileDiff
from sre.integrations.errors import NoDataError
from sre.integrations.mocks import mock_commit_diff

logger = logging.getLogger(__name__)

# The commit endpoint does not say which branch a commit is on.
DEFAULT_BRANCH = "main"


class GitHubClient:
    """Source-control client.

    Attributes:
        config: Resolved GitHub token.
        get_commit_diff: FallbackPolicy around fetch_commit_diff(). Never raises.
    """

    def __init__(
        self,
        config: GitHubConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self.get_commit_diff: FallbackPolicy[[CommitDiffQuery], CommitDiff] = FallbackPolicy(
            "GitHub",
            producer=self.fetch_commit_diff,
            mock=mock_commit_diff,
            is_configured=lambda query: config.is_configured(),
        )

    async def fetch_commit_diff(self, query: CommitDiffQuery) -> CommitDiff:
        """Fetch a commit and build the diff for the requested file.

        Raises:
            httpx.HTTPStatusError: GitHub returned a non-2xx response.
            NoDataError: The commit has no matching file.
        """
        headers = {
            "Authorization": f"token {self.config.token}",
            "Accept": "application/vnd.github.v3+json",
        }

        async with httpx.AsyncClient(
            base_url=self.config.api_base,
            headers=headers,
            timeout=self.config.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.get(f"/repos/{query.owner}/{query.repo}/commits/{query.commit_sha}")
            response.raise_for_status()
            data = response.json()

        file = self._select_file(data.get("files") or [], query.file_name)
        changes = parse_patch(file.get("patch") or "")
        author = data["commit"]["author"]

        logger.info(
            "Fetched %s/%s@%s, %d change lines from %s.",
            query.owner, query.repo, query.commit_sha, len(changes), file["filename"],
        )

        return CommitDiff(
            commit=CommitInfo(
                sha=data["sha"],
                message=data["commit"]["message"],
                author=author.get("email") or author.get("name") or "unknown",
                date=author["date"],
                branch=DEFAULT_BRANCH,
                url=data.get("html_url") or "",
            ),
            diff=FileDiff(
                file_name=file["filename"],
                language=language_for_filename(file["filename"]),
                additions=file.get("additions", 0),
                deletions=file.get("deletions", 0),
                changes=changes,
            ),
            analysis=DiffAnalysis(
                severity="medium",
                potential_issues=analyze_changes(changes),
                recommendation=REVIEW_RECOMMENDATION,
            ),
        )

    @staticmethod
    def _select_file(files: list[dict], file_name: str | None) -> dict:
        if file_name:
            file = next((f for f in files if f.get("filename") == file_name), None)
        else:
            file = files[0] if files else None

        if file is None:
            raise NoDataError("No files found in commit")
        return file
