"""Vercel integration client.

Lists deployments for a project, looks up a single deployment, and promotes
a deployment to production. Promotion is the state-changing call the
rollback workflow builds on (sre/rollback.py); Vercel has no rollback
endpoint of its own.

Live mode: VERCEL_TOKEN is set. VERCEL_TEAM_ID, when set, adds teamId to
           every request.
Mock mode: VERCEL_TOKEN unset, or a read failed. get_deployments() and
           get_deployment() return fixed mock data. promote() has no mock
           path: it always raises on failure.

Vercel API reference: https://vercel.com/docs/rest-api/endpoints/deployments
"""

import logging

import httpx

from core.config import VercelConfig
from core.fallback import FallbackPolicy
from normalize.deployments import normalize_deployment
from schemas.deployment import Deployment, DeploymentList, DeploymentQuery
from sre.integrations.errors import IntegrationError
from sre.integrations.mocks import mock_deployment, mock_deployment_list

logger = logging.getLogger(__name__)


class VercelClient:
    """Deployment-platform client.

    Attributes:
        config: Resolved Vercel token and optional team scope.
        get_deployments: FallbackPolicy around fetch_deployments().
        get_deployment: FallbackPolicy around fetch_deployment().
    """

    def __init__(
        self,
        config: VercelConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self.get_deployments: FallbackPolicy[[DeploymentQuery], DeploymentList] = FallbackPolicy(
            "Vercel",
            producer=self.fetch_deployments,
            mock=mock_deployment_list,
            is_configured=lambda query: config.is_configured(),
        )
        self.get_deployment: FallbackPolicy[[str], Deployment] = FallbackPolicy(
            "Vercel",
            producer=self.fetch_deployment,
            mock=mock_deployment,
            is_configured=lambda deployment_id: config.is_configured(),
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.api_base,
            headers={"Authorization": f"Bearer {self.config.token}"},
            timeout=self.config.timeout_seconds,
            transport=self._transport,
        )

    async def fetch_deployments(self, query: DeploymentQuery) -> DeploymentList:
        """List the most recent deployments for a project, newest first.

        Raises:
            httpx.HTTPStatusError: Vercel returned a non-2xx response.
            IntegrationError: The body has no "deployments" list.
        """
        params = {"projectId": query.project_name, "limit": query.limit, **self.config.team_params()}

        async with self._client() as client:
            response = await client.get("/v6/deployments", params=params)
            response.raise_for_status()
            data = response.json()

        raw_deployments = data.get("deployments") if isinstance(data, dict) else None
        if not isinstance(raw_deployments, list):
            raise IntegrationError("Vercel response has no deployments list")

        deployments = [normalize_deployment(raw, query.project_name) for raw in raw_deployments]
        logger.info("Fetched %d Vercel deployments for %s.", len(deployments), query.project_name)
        return DeploymentList(deployments=deployments)

    async def fetch_deployment(self, deployment_id: str) -> Deployment:
        """Look up one deployment by ID or URL.

        Raises:
            httpx.HTTPStatusError: Vercel returned a non-2xx response.
        """
        async with self._client() as client:
            response = await client.get(
                f"/v13/deployments/{deployment_id}", params=self.config.team_params()
            )
            response.raise_for_status()
            return normalize_deployment(response.json())

    async def promote(self, deployment_id: str) -> None:
        """Promote a deployment to the project's production target.

        Raises:
            httpx.HTTPStatusError: Vercel refused the promotion.
        """
        async with self._client() as client:
            response = await client.post(
                f"/v13/deployments/{deployment_id}/promote", params=self.config.team_params()
            )
            response.raise_for_status()

        logger.info("Promoted Vercel deployment %s.", deployment_id)
