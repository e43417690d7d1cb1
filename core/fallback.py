"""Degrade-to-mock wrapper for read operations.

FallbackPolicy wraps an async producer so callers always get a well-formed
response. Two triggers swap in mock data:

1. Configuration absence. The policy's predicate says the credentials the
   producer needs are missing. The producer is never called, no request is
   made, and a WARNING is logged.
2. Call failure. The producer raised: a transport error, a non-2xx status
   surfaced by raise_for_status(), a payload that failed a shape check, or
   a no-data condition. An ERROR is logged.

No retries. One attempt per call, then mock data.

Only read operations go through this wrapper. The rollback write reports
its failures as a RollbackResult instead (see sre/rollback.py).
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Generic, ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class FallbackPolicy(Generic[P, R]):
    """Callable that returns real data when it can and mock data otherwise.

    The producer, the mock factory, and the predicate all take the same
    arguments as the policy itself (zero or one in practice), so each can
    depend on the query: the Sentry predicate, for example, accepts an
    explicit project in place of a configured one.

    Example:
        issues = FallbackPolicy(
            "Sentry",
            producer=client.fetch_issues,
            mock=lambda query: mock_issue_report(),
            is_configured=lambda query: config.is_configured(query.project_id),
        )
        report = await issues(IssueQuery(limit=5))   # never raises

    Attributes:
        name: Service name used in log messages.
    """

    def __init__(
        self,
        name: str,
        producer: Callable[P, Awaitable[R]],
        mock: Callable[P, R],
        is_configured: Callable[P, bool],
    ) -> None:
        self.name = name
        self._producer = producer
        self._mock = mock
        self._is_configured = is_configured

    async def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R:
        if not self._is_configured(*args, **kwargs):
            logger.warning("%s credentials missing, using mock data.", self.name)
            return self._mock(*args, **kwargs)

        try:
            return await self._producer(*args, **kwargs)
        except Exception as exc:
            logger.error("Error fetching %s data, using mock data: %r", self.name, exc)
            return self._mock(*args, **kwargs)
