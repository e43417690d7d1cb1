"""Sentinel: incident-response HTTP API.

Exposes the integration layer to the calling layer (chat tool registry,
dashboard UI) as plain JSON. Every model is serialized with camelCase keys.

Read endpoints never fail because a service is down: they answer with mock
data instead (see core/fallback.py). The rollback endpoint is the one place
a real failure shows up, as {"success": false, "status": "failed", ...}
with HTTP 200, since the request itself was handled.

    GET  /health
    GET  /api/issues?projectId=&severity=&limit=
    GET  /api/commits/{owner}/{repo}/{sha}?fileName=
    GET  /api/deployments?projectName=&limit=
    GET  /api/deployments/{deployment_id}
    POST /api/rollback
    GET  /api/dashboard

Run locally:
    uv run uvicorn main:app --reload
    uv run python main.py
"""

import logging
import logging.handlers
import os
import pathlib
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from aggregation.dashboard import DashboardAggregator
from core.config import DashboardTargets, IntegrationConfig
from schemas.commit import CommitDiff, CommitDiffQuery
from schemas.dashboard import DashboardSnapshot
from schemas.deployment import Deployment, DeploymentList, DeploymentQuery, RollbackRequest, RollbackResult
from schemas.issue import IssueQuery, IssueReport, IssueSeverity
from sre.actions import IncidentActions

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_FILE = pathlib.Path(__file__).parent / "sentinel.log"
LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_file_handler = logging.handlers.RotatingFileHandler(
    LOG_FILE, maxBytes=1_000_000, backupCount=3, encoding="utf-8",
)
_file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

_root_logger = logging.getLogger()
_root_logger.setLevel(logging.INFO)
_root_logger.addHandler(_file_handler)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App + CORS
# ---------------------------------------------------------------------------

app = FastAPI(title="Sentinel", version="0.1.0")

# ALLOWED_ORIGINS overrides the default for production deployments.
_origins = os.environ.get("ALLOWED_ORIGINS", "http://localhost:3000").split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_config() -> IntegrationConfig:
    """Resolve the environment once per process."""
    return IntegrationConfig.from_env()


def get_actions(config: Annotated[IntegrationConfig, Depends(get_config)]) -> IncidentActions:
    return IncidentActions(config)


def get_targets() -> DashboardTargets:
    return DashboardTargets.from_env()


Actions = Annotated[IncidentActions, Depends(get_actions)]

# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/issues", response_model=IssueReport)
async def list_issues(
    actions: Actions,
    project_id: Annotated[str | None, Query(alias="projectId")] = None,
    severity: IssueSeverity | None = None,
    limit: Annotated[int, Query(ge=1)] = 10,
):
    """Unresolved Sentry issues with a severity summary."""
    return await actions.get_sentry_issues(
        IssueQuery(project_id=project_id, severity=severity, limit=limit)
    )


@app.get("/api/commits/{owner}/{repo}/{sha}", response_model=CommitDiff)
async def commit_diff(
    owner: str,
    repo: str,
    sha: str,
    actions: Actions,
    file_name: Annotated[str | None, Query(alias="fileName")] = None,
):
    """Parsed diff and advisories for one file of a commit."""
    return await actions.get_github_commit_diff(
        CommitDiffQuery(owner=owner, repo=repo, commit_sha=sha, file_name=file_name)
    )


@app.get("/api/deployments", response_model=DeploymentList)
async def list_deployments(
    actions: Actions,
    project_name: Annotated[str, Query(alias="projectName")],
    limit: Annotated[int, Query(ge=1)] = 5,
):
    return await actions.get_vercel_deployments(
        DeploymentQuery(project_name=project_name, limit=limit)
    )


@app.get("/api/deployments/{deployment_id}", response_model=Deployment)
async def get_deployment(deployment_id: str, actions: Actions):
    return await actions.get_vercel_deployment(deployment_id)


@app.post("/api/rollback", response_model=RollbackResult)
async def rollback(request: RollbackRequest, actions: Actions):
    """Promote the previous READY deployment. Always answers with a terminal result."""
    result = await actions.execute_vercel_rollback(request)
    logger.info(
        "Rollback request for %s finished: %s.", request.project_name, result.status,
    )
    return result


@app.get("/api/dashboard", response_model=DashboardSnapshot)
async def dashboard(
    actions: Actions,
    targets: Annotated[DashboardTargets, Depends(get_targets)],
):
    """Issues, diff, deployments, vitals, and timeline in one response."""
    return await DashboardAggregator(actions, targets).build()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
