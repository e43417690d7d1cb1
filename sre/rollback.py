"""Rollback orchestrator.

Vercel has no rollback endpoint, so a rollback is emulated by promoting an
earlier deployment back to production:

    1. list up to 10 recent deployments for the project
    2. pick the target: the first deployment, in the order Vercel returned
       them, that is not the one being rolled back from and is READY
    3. promote the target
    4. report a terminal RollbackResult

The steps run strictly in sequence; step 3 needs step 2's output. There is
no intermediate state: the result is either completed at 100% or failed at
0%.

Unlike the read paths, a failure here is never papered over with mock data.
The caller asked for a state change and needs to know it did not happen, so
every exception becomes RollbackResult.failed with the cause in the message.
The one mock path is missing credentials, where nothing can be attempted at
all and a simulated success is returned for demo use.
"""

import logging

from schemas.deployment import Deployment, DeploymentQuery, RollbackRequest, RollbackResult
from sre.integrations.errors import NoDataError
from sre.integrations.mocks import mock_rollback_result
from sre.integrations.vercel import VercelClient

logger = logging.getLogger(__name__)

CANDIDATE_LIMIT = 10
READY_STATE = "READY"


class RollbackOrchestrator:
    """Runs the promote-previous-deployment workflow on top of VercelClient."""

    def __init__(self, vercel: VercelClient) -> None:
        self.vercel = vercel

    async def rollback(self, request: RollbackRequest) -> RollbackResult:
        """Roll a project back to its previous READY deployment.

        Never raises.

        Args:
            request: Which deployment to roll back from, and for which project.

        Returns:
            A completed result naming the promoted deployment, or a failed
            result whose message starts with "Rollback failed: ".
        """
        if not self.vercel.config.is_configured():
            logger.warning("Vercel token missing, simulating rollback.")
            return mock_rollback_result(request)

        logger.info(
            "Rolling back %s from %s (reason: %s).",
            request.project_name,
            request.deployment_id,
            request.reason or "none given",
        )

        try:
            candidates = await self.vercel.fetch_deployments(
                DeploymentQuery(project_name=request.project_name, limit=CANDIDATE_LIMIT)
            )
            target = select_rollback_target(candidates.deployments, request.deployment_id)
            await self.vercel.promote(target.id)
        except Exception as exc:
            logger.error("Rollback of %s failed: %r", request.project_name, exc)
            return RollbackResult.failed(
                deployment_id=request.deployment_id,
                message=f"Rollback failed: {exc}",
            )

        logger.info("Rolled back %s to %s.", request.project_name, target.id)
        return RollbackResult.completed(
            deployment_id=request.deployment_id,
            previous_deployment_id=target.id,
            message=f"Successfully rolled back {request.project_name} to deployment {target.id}",
        )


def select_rollback_target(deployments: list[Deployment], current_id: str) -> Deployment:
    """Return the first READY deployment that is not ``current_id``.

    API order is kept as-is. No re-sorting by created_at.

    Raises:
        NoDataError: No deployment qualifies.
    """
    for deployment in deployments:
        if deployment.id != current_id and deployment.status == READY_STATE:
            return deployment
    raise NoDataError("No suitable deployment found for rollback")
