"""Integration configuration.

All environment reads for the integration layer happen here, once, in
IntegrationConfig.from_env(). Clients receive their own section at
construction time and never look at os.environ themselves.

Environment variables (all optional; an empty string counts as unset):
    SENTRY_AUTH_TOKEN, SENTRY_ORG, SENTRY_PROJECT_SLUG
    GITHUB_TOKEN
    VERCEL_TOKEN, VERCEL_TEAM_ID
    SENTRY_API_BASE, GITHUB_API_BASE, VERCEL_API_BASE   (override hosts)
    HTTP_TIMEOUT_SECONDS                                (default 15)

A .env file in the working directory is loaded on import.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

SENTRY_API_BASE = "https://sentry.io/api/0"
GITHUB_API_BASE = "https://api.github.com"
VERCEL_API_BASE = "https://api.vercel.com"
DEFAULT_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True)
class SentryConfig:
    auth_token: str | None = None
    org: str | None = None
    project_slug: str | None = None
    api_base: str = SENTRY_API_BASE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def is_configured(self, project_id: str | None = None) -> bool:
        """True when a token, an org, and some project are all known."""
        return bool(self.auth_token and self.org and (project_id or self.project_slug))


@dataclass(frozen=True)
class GitHubConfig:
    token: str | None = None
    api_base: str = GITHUB_API_BASE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def is_configured(self) -> bool:
        return bool(self.token)


@dataclass(frozen=True)
class VercelConfig:
    token: str | None = None
    team_id: str | None = None
    api_base: str = VERCEL_API_BASE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def is_configured(self) -> bool:
        return bool(self.token)

    def team_params(self) -> dict[str, str]:
        """Query parameters scoping a request to the configured team."""
        return {"teamId": self.team_id} if self.team_id else {}


@dataclass(frozen=True)
class IntegrationConfig:
    """Resolved configuration for all three integrations.

    Attributes:
        sentry: Error-tracking credentials and project scope.
        github: Source-control token.
        vercel: Deployment-platform token and optional team scope.
    """

    sentry: SentryConfig
    github: GitHubConfig
    vercel: VercelConfig

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "IntegrationConfig":
        """Resolve configuration from the environment.

        Args:
            environ: Mapping to read from. Defaults to os.environ.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            return (env.get(name) or "").strip() or None

        timeout = float(get("HTTP_TIMEOUT_SECONDS") or DEFAULT_TIMEOUT_SECONDS)

        return cls(
            sentry=SentryConfig(
                auth_token=get("SENTRY_AUTH_TOKEN"),
                org=get("SENTRY_ORG"),
                project_slug=get("SENTRY_PROJECT_SLUG"),
                api_base=get("SENTRY_API_BASE") or SENTRY_API_BASE,
                timeout_seconds=timeout,
            ),
            github=GitHubConfig(
                token=get("GITHUB_TOKEN"),
                api_base=get("GITHUB_API_BASE") or GITHUB_API_BASE,
                timeout_seconds=timeout,
            ),
            vercel=VercelConfig(
                token=get("VERCEL_TOKEN"),
                team_id=get("VERCEL_TEAM_ID"),
                api_base=get("VERCEL_API_BASE") or VERCEL_API_BASE,
                timeout_seconds=timeout,
            ),
        )


@dataclass(frozen=True)
class DashboardTargets:
    """Which repository, commit, and project the dashboard shows.

    Environment variables:
        GITHUB_REPO_OWNER, GITHUB_REPO_NAME, GITHUB_COMMIT_SHA
        VERCEL_PROJECT_ID (or VERCEL_PROJECT_NAME)
    """

    github_owner: str = "vercel"
    github_repo: str = "next.js"
    commit_sha: str = "main"
    vercel_project: str = "demo-project"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "DashboardTargets":
        env = os.environ if environ is None else environ
        return cls(
            github_owner=env.get("GITHUB_REPO_OWNER") or cls.github_owner,
            github_repo=env.get("GITHUB_REPO_NAME") or cls.github_repo,
            commit_sha=env.get("GITHUB_COMMIT_SHA") or cls.commit_sha,
            vercel_project=(
                env.get("VERCEL_PROJECT_ID") or env.get("VERCEL_PROJECT_NAME") or cls.vercel_project
            ),
        )
