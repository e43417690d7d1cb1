"""Exceptions raised inside the integration clients.

Clients raise; FallbackPolicy and RollbackOrchestrator catch. Transport
failures surface as httpx exceptions (httpx.HTTPStatusError for non-2xx
responses), so these types only cover what httpx cannot see.
"""


class IntegrationError(Exception):
    """A service answered 2xx but the payload is not shaped as expected."""


class NoDataError(IntegrationError):
    """A well-formed response held nothing usable: no file in a commit, no
    eligible rollback target."""
