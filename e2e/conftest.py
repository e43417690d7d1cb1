"""Shared fixtures.

FakeService stands in for Sentry, GitHub, and Vercel at the transport
level: clients receive its httpx.MockTransport and every request they make
is recorded, so tests can assert both on results and on how many calls
went out. No real network access anywhere in the suite.
"""

import httpx
import pytest

from core.config import GitHubConfig, IntegrationConfig, SentryConfig, VercelConfig


class FakeService:
    """Canned responses keyed by (method, path), plus a request log."""

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], tuple[int, object] | Exception] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, json: object = None, status: int = 200) -> "FakeService":
        self._routes[(method, path)] = (status, json)
        return self

    def fail(self, method: str, path: str, exc: Exception) -> "FakeService":
        self._routes[(method, path)] = exc
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        if isinstance(route, Exception):
            raise route
        status, body = route
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def sentry_config() -> SentryConfig:
    return SentryConfig(auth_token="sntrys_test", org="acme", project_slug="backend-api")


@pytest.fixture
def github_config() -> GitHubConfig:
    return GitHubConfig(token="ghp_test")


@pytest.fixture
def vercel_config() -> VercelConfig:
    return VercelConfig(token="vercel_test")


@pytest.fixture
def config(sentry_config, github_config, vercel_config) -> IntegrationConfig:
    return IntegrationConfig(sentry=sentry_config, github=github_config, vercel=vercel_config)


@pytest.fixture
def empty_config() -> IntegrationConfig:
    return IntegrationConfig.from_env({})
