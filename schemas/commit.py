"""Commit diff schemas.

A CommitDiff describes one file of one commit: commit metadata, the parsed
line-level changes (at most 20), and a coarse advisory analysis.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from schemas.base import WireModel

ChangeType = Literal["add", "remove", "context"]
RiskLevel = Literal["high", "medium", "low"]

MAX_CHANGE_LINES = 20


class CommitDiffQuery(WireModel):
    """Input to a commit diff fetch.

    Attributes:
        owner: Repository owner (user or organization).
        repo: Repository name.
        commit_sha: Full or abbreviated commit SHA, or a ref such as "main".
        file_name: Path of the file to show. Defaults to the first file in
            the commit.
    """

    owner: str
    repo: str
    commit_sha: str
    file_name: str | None = None


class ChangeLine(WireModel):
    """One line of a parsed patch.

    line_number tracks the new-file line counter only, so a removed line
    carries the number of the new-file line it sits in front of.
    """

    line_number: int
    type: ChangeType
    content: str


class CommitInfo(WireModel):
    sha: str
    message: str
    author: str
    date: datetime
    branch: str
    url: str = ""


class FileDiff(WireModel):
    file_name: str
    language: str
    additions: int = 0
    deletions: int = 0
    changes: list[ChangeLine] = Field(default_factory=list, max_length=MAX_CHANGE_LINES)


class DiffAnalysis(WireModel):
    """Advisory analysis of a diff.

    severity is fixed to "medium" for any live diff. It is not derived from
    potential_issues.
    """

    severity: RiskLevel
    potential_issues: list[str]
    recommendation: str = ""


class CommitDiff(WireModel):
    commit: CommitInfo
    diff: FileDiff
    analysis: DiffAnalysis
