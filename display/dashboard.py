"""Rich renderers for the terminal dashboard.

Pure functions from schema objects to Rich renderables. Nothing here
fetches data or knows whether it is live or mock.
"""

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from schemas.commit import CommitDiff
from schemas.dashboard import DashboardSnapshot, SystemVitals, TimelineEvent
from schemas.deployment import DeploymentList, RollbackResult
from schemas.issue import IssueReport

_SEVERITY_STYLE = {"critical": "bold red", "warning": "yellow", "resolved": "green"}
_RISK_STYLE = {"high": "bold red", "medium": "yellow", "low": "green"}
_CHANGE_STYLE = {"add": "green", "remove": "red", "context": "dim"}
_CHANGE_PREFIX = {"add": "+", "remove": "-", "context": " "}
_TIMELINE_STYLE = {"completed": "green", "failed": "red", "in-progress": "yellow"}


def _first_line(text: str) -> str:
    return text.splitlines()[0] if text else ""


def render_vitals(vitals: SystemVitals) -> Panel:
    table = Table.grid(padding=(0, 3))
    for metric in vitals.metrics:
        table.add_column(justify="center")
    table.add_row(*[f"[bold]{m.value}[/bold]" for m in vitals.metrics])
    table.add_row(*[f"[dim]{m.label}[/dim]" for m in vitals.metrics])

    style = "red" if vitals.status == "alert" else "green"
    return Panel(table, title=vitals.title, subtitle=vitals.status.upper(), border_style=style)


def render_threats(report: IssueReport) -> Panel:
    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("Severity", width=10)
    table.add_column("Issue", ratio=3)
    table.add_column("Events", justify="right")
    table.add_column("Users", justify="right")
    table.add_column("Project")

    for issue in report.issues:
        style = _SEVERITY_STYLE[issue.severity]
        table.add_row(
            f"[{style}]{issue.severity}[/{style}]",
            Text(issue.title),
            str(issue.count),
            str(issue.affected_users),
            Text(issue.project),
        )

    s = report.summary
    subtitle = (
        f"{s.critical} critical · {s.warning} warning · "
        f"{s.resolved} resolved · {s.total_events} events"
    )
    return Panel(table, title="Threats", subtitle=subtitle, border_style="red")


def render_diff(diff: CommitDiff) -> Panel:
    lines = Text()
    for change in diff.diff.changes:
        style = _CHANGE_STYLE[change.type]
        lines.append(
            f"{change.line_number:>5} {_CHANGE_PREFIX[change.type]} {change.content}\n",
            style=style,
        )

    risk = _RISK_STYLE[diff.analysis.severity]
    advisories = Text()
    for advisory in diff.analysis.potential_issues:
        advisories.append(f"• {advisory}\n")
    if diff.analysis.recommendation:
        advisories.append(diff.analysis.recommendation, style="italic")

    header = Text.from_markup(
        f"[bold]{diff.commit.sha[:7]}[/bold] {escape(_first_line(diff.commit.message))}\n"
        f"[dim]{escape(diff.commit.author)} · {escape(diff.diff.file_name)} ({diff.diff.language}) "
        f"+{diff.diff.additions} -{diff.diff.deletions}[/dim]"
    )
    return Panel(
        Group(header, Text(), lines, advisories),
        title="Commit Diff",
        subtitle=f"[{risk}]risk: {diff.analysis.severity}[/{risk}]",
        border_style="cyan",
    )


def render_deployments(deployments: DeploymentList) -> Panel:
    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("Deployment")
    table.add_column("Status")
    table.add_column("Branch")
    table.add_column("Created")
    table.add_column("URL", ratio=2)

    for d in deployments.deployments:
        style = "green" if d.status == "READY" else "yellow"
        table.add_row(
            d.id,
            f"[{style}]{d.status}[/{style}]",
            d.branch or "-",
            d.created_at.strftime("%Y-%m-%d %H:%M"),
            d.url,
        )
    return Panel(table, title="Deployments", border_style="blue")


def render_timeline(events: list[TimelineEvent]) -> Panel:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_column()

    for event in events:
        style = _TIMELINE_STYLE[event.status]
        table.add_row(
            event.timestamp.strftime("%m-%d %H:%M"),
            f"[{style}]●[/{style}] {escape(event.title)}",
            f"[dim]{escape(event.description)} · {escape(event.meta)}[/dim]",
        )
    return Panel(table, title="Recent Activity", border_style="magenta")


def render_dashboard(snapshot: DashboardSnapshot) -> Group:
    return Group(
        render_vitals(snapshot.vitals),
        render_threats(snapshot.threats),
        render_diff(snapshot.diff),
        render_deployments(snapshot.deployments),
        render_timeline(snapshot.timeline),
    )


def render_rollback(result: RollbackResult) -> Panel:
    style = "green" if result.success else "red"
    body = Text.from_markup(
        f"[bold]{escape(result.message)}[/bold]\n"
        f"status    [{style}]{result.status}[/{style}]\n"
        f"progress  {result.progress}%\n"
        f"from      {result.deployment_id}\n"
        f"to        {result.previous_deployment_id or '-'}"
    )
    return Panel(body, title="Rollback", border_style=style)
