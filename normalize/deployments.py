"""Vercel deployment normalizer.

Vercel's list endpoint (v6) and single-deployment endpoint (v13) disagree on
a few field names: the list reports "state", the single endpoint reports
"readyState"; the list has "created" and v13 has "createdAt". Both report
timestamps as epoch milliseconds and the URL without a scheme.
"""

from datetime import datetime, timezone

from schemas.deployment import Deployment


def epoch_ms_to_datetime(value: int | float | None) -> datetime:
    """Convert Vercel epoch milliseconds to an aware UTC datetime."""
    if value is None:
        return datetime.now(timezone.utc)
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def normalize_deployment(raw: dict, project_name: str | None = None) -> Deployment:
    """Convert one raw Vercel deployment into a Deployment.

    Args:
        raw: Deployment object from /v6/deployments or /v13/deployments/{id}.
        project_name: Project the caller asked about. Falls back to the
            payload's own "name" when not given.
    """
    meta = raw.get("meta") or {}
    host = raw.get("url") or ""

    return Deployment(
        id=raw.get("uid") or raw.get("id") or "",
        project_name=project_name or raw.get("name") or "unknown",
        status=raw.get("state") or raw.get("readyState") or "UNKNOWN",
        url=f"https://{host}" if host else "",
        created_at=epoch_ms_to_datetime(raw.get("created") or raw.get("createdAt")),
        commit_sha=meta.get("githubCommitSha"),
        branch=meta.get("githubCommitRef"),
    )
