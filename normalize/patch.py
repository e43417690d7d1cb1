"""Unified-diff patch parser.

Turns the per-file "patch" text GitHub returns for a commit into ChangeLine
records. Deterministic, no I/O.

Line numbering follows the new file only:
    - a hunk header "@@ -a,b +c,d @@" resets the counter to c
    - "+" and " " lines are emitted at the counter, then advance it
    - "-" lines are emitted at the counter and do NOT advance it, since a
      removed line does not exist in the new file
    - anything else (file headers, "\\ No newline at end of file") is skipped

Example:
    @@ -1,3 +5,3 @@
     a          context  5
    -b          remove   6
    +c          add      6
     d          context  7
"""

import re

from schemas.commit import MAX_CHANGE_LINES, ChangeLine

_HUNK_HEADER = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")


def parse_patch(patch: str, limit: int = MAX_CHANGE_LINES) -> list[ChangeLine]:
    """Parse one file's unified-diff text into at most ``limit`` ChangeLines.

    Args:
        patch: Raw patch text for a single file. Empty for binary files.
        limit: Maximum number of records kept. Extra lines are dropped,
            not reported.

    Returns:
        ChangeLine records in patch order.
    """
    changes: list[ChangeLine] = []
    line_number = 0

    for line in patch.split("\n"):
        if line.startswith("@@"):
            match = _HUNK_HEADER.match(line)
            if match:
                line_number = int(match.group(1))
            continue

        if line.startswith("+"):
            changes.append(ChangeLine(line_number=line_number, type="add", content=line[1:]))
            line_number += 1
        elif line.startswith("-"):
            changes.append(ChangeLine(line_number=line_number, type="remove", content=line[1:]))
        elif line.startswith(" "):
            changes.append(ChangeLine(line_number=line_number, type="context", content=line[1:]))
            line_number += 1

        if len(changes) >= limit:
            break

    return changes
