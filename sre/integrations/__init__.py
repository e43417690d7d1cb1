"""External service clients: Sentry, GitHub, Vercel."""

from sre.integrations.errors import IntegrationError, NoDataError
from sre.integrations.github import GitHubClient
from sre.integrations.sentry import SentryClient
from sre.integrations.vercel import VercelClient

__all__ = [
    "SentryClient",
    "GitHubClient",
    "VercelClient",
    "IntegrationError",
    "NoDataError",
]
