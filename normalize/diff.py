"""Change analysis for parsed diffs.

Coarse, pattern-only advisories over the added lines of a diff, plus the
extension -> language table used for syntax highlighting. No scoring: the
analysis severity for a live diff is fixed to "medium" by the GitHub client
regardless of what is found here.
"""

import re

from schemas.commit import ChangeLine

DEBUG_PRINT_ADVISORY = "Debug logging statement added - consider removing before production"
TODO_ADVISORY = "TODO/FIXME comments found - incomplete work may exist"
ANY_TYPE_ADVISORY = "TypeScript 'any' type used - consider using specific types"
NO_ISSUES_ADVISORY = "No obvious issues detected - changes appear safe"

REVIEW_RECOMMENDATION = "Review changes for potential issues before deploying to production."

_LANGUAGES = {
    "ts": "typescript",
    "tsx": "typescript",
    "js": "javascript",
    "jsx": "javascript",
    "py": "python",
    "go": "go",
    "java": "java",
    "rb": "ruby",
    "php": "php",
    "css": "css",
    "html": "html",
}

_DEBUG_PRINT = re.compile(r"console\.log|\bprint\(")


def language_for_filename(filename: str) -> str:
    """Return the highlight language for a path, "text" when unknown."""
    _, dot, ext = filename.rpartition(".")
    if not dot:
        return "text"
    return _LANGUAGES.get(ext.lower(), "text")


def analyze_changes(changes: list[ChangeLine]) -> list[str]:
    """Return advisories for the added lines of a diff.

    Each pattern contributes at most one advisory, always in the same order:
    debug print, TODO/FIXME, then the literal substring "any". When none
    match, the result is the single "no obvious issues" advisory.
    """
    added = [c.content for c in changes if c.type == "add"]
    advisories: list[str] = []

    if any(_DEBUG_PRINT.search(line) for line in added):
        advisories.append(DEBUG_PRINT_ADVISORY)

    if any("TODO" in line or "FIXME" in line for line in added):
        advisories.append(TODO_ADVISORY)

    if any("any" in line for line in added):
        advisories.append(ANY_TYPE_ADVISORY)

    if not advisories:
        advisories.append(NO_ISSUES_ADVISORY)

    return advisories
