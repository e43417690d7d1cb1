"""Sentry issue normalizer.

The single place that touches raw Sentry issue payloads. Every field access
has a literal default. Sentry omits keys depending on the platform SDK
and the issue type. What comes out is a complete, strict Issue.

Severity classification:
    level "error" or "fatal"  -> "critical"
    anything else             -> "warning"
Classification never produces "resolved".

Stack trace fallback chain (first hit wins):
    1. metadata.value
    2. "at {culprit}"
    3. last 5 frames of the exception entry on lastEvent
    4. "{title} (no stack trace available)"
"""

from datetime import datetime, timezone

from schemas.issue import Issue, IssueSeverity, IssueSummary

STACK_FRAME_LIMIT = 5
UNKNOWN_TITLE = "Unknown error"

_CRITICAL_LEVELS = {"error", "fatal"}


def classify_severity(level: str | None) -> IssueSeverity:
    """Map a Sentry level to an internal severity."""
    return "critical" if level in _CRITICAL_LEVELS else "warning"


def extract_stack_trace(raw: dict, title: str) -> str:
    """Pick the best available stack trace text for a raw issue.

    Args:
        raw: One issue object from the Sentry issues endpoint.
        title: The already-resolved issue title, used for the final fallback.

    Returns:
        Non-empty stack trace text.
    """
    metadata = raw.get("metadata") or {}
    if metadata.get("value"):
        return metadata["value"]

    if raw.get("culprit"):
        return f"at {raw['culprit']}"

    frames_text = _frames_from_last_event(raw.get("lastEvent") or {})
    if frames_text:
        return frames_text

    return f"{title} (no stack trace available)"


def _frames_from_last_event(event: dict) -> str:
    entries = event.get("entries") or []
    exception = next((e for e in entries if e.get("type") == "exception"), None)
    if exception is None:
        return ""

    values = (exception.get("data") or {}).get("values") or []
    stacktrace = values[0].get("stacktrace") if values else None
    if not stacktrace:
        return ""

    frames = (stacktrace.get("frames") or [])[-STACK_FRAME_LIMIT:]
    return "\n".join(
        f"at {frame.get('function') or 'anonymous'} "
        f"({frame.get('filename')}:{frame.get('lineno')}:{frame.get('colno')})"
        for frame in frames
    )


def normalize_issue(raw: dict, project: str) -> Issue:
    """Convert one raw Sentry issue into an Issue.

    Args:
        raw: Issue object from GET /projects/{org}/{project}/issues/.
        project: Project slug the issues were fetched from.

    Returns:
        A strict Issue. Missing counters become 0 and a missing lastSeen
        becomes the current time.
    """
    metadata = raw.get("metadata") or {}
    title = raw.get("title") or metadata.get("type") or UNKNOWN_TITLE

    return Issue(
        id=str(raw.get("id", "")),
        title=title,
        severity=classify_severity(raw.get("level")),
        # Sentry reports count as a string ("1337")
        count=int(raw.get("count") or 0),
        last_seen=raw.get("lastSeen") or datetime.now(timezone.utc),
        project=project or "unknown",
        affected_users=int(raw.get("userCount") or 0),
        stack_trace=extract_stack_trace(raw, title),
    )


def summarize_issues(issues: list[Issue]) -> IssueSummary:
    """Fold a list of issues into severity counts and an event total.

    resolved stays 0: the issues endpoint is queried with is:unresolved, so
    a resolved issue never reaches this function from a live fetch.
    """
    return IssueSummary(
        critical=sum(1 for i in issues if i.severity == "critical"),
        warning=sum(1 for i in issues if i.severity == "warning"),
        resolved=0,
        total_events=sum(i.count for i in issues),
    )
