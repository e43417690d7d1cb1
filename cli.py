"""Sentinel: terminal dashboard.

Fetches issues, the configured commit diff, and recent deployments, then
renders them with Rich. Any service without credentials shows mock data,
so the dashboard runs with an empty .env.

Usage:
    uv run python cli.py
    uv run python cli.py --rollback dpl_abc123 [--project my-app] [--reason "..."]
"""

import argparse
import asyncio

from rich.console import Console

from aggregation.dashboard import DashboardAggregator
from core.config import DashboardTargets, IntegrationConfig
from display.dashboard import render_dashboard, render_rollback
from schemas.deployment import RollbackRequest
from sre.actions import IncidentActions

console = Console()


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sentinel incident dashboard")
    parser.add_argument(
        "--rollback",
        metavar="DEPLOYMENT_ID",
        help="promote the previous READY deployment instead of showing the dashboard",
    )
    parser.add_argument("--project", help="Vercel project (defaults to VERCEL_PROJECT_ID)")
    parser.add_argument("--reason", help="reason recorded with the rollback")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> None:
    actions = IncidentActions(IntegrationConfig.from_env())
    targets = DashboardTargets.from_env()

    if args.rollback:
        request = RollbackRequest(
            deployment_id=args.rollback,
            project_name=args.project or targets.vercel_project,
            reason=args.reason,
        )
        with console.status(f"Rolling back {request.project_name} ..."):
            result = await actions.execute_vercel_rollback(request)
        console.print(render_rollback(result))
        return

    with console.status("Fetching Sentry, GitHub and Vercel ..."):
        snapshot = await DashboardAggregator(actions, targets).build()

    console.rule("[bold]Sentinel[/bold]")
    console.print(render_dashboard(snapshot))


def main(argv: list[str] | None = None) -> None:
    asyncio.run(_run(_parse_args(argv)))


if __name__ == "__main__":
    main()
