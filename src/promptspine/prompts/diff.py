"""
Line-level diff between two rendered prompts.

Standard longest-common-subsequence over lines, backtracked from the end.
Line equality ignores trailing whitespace only; a leading-whitespace change
is a real change. The result is asymmetric by construction: what
``compute_diff(a, b)`` reports as *added*, ``compute_diff(b, a)`` reports
as *removed*.

Run ids and ISO-8601 timestamps differ on every render. Pass both texts
through :func:`normalize_for_diff` first so those never show up as drift.

Examples:
    >>> d = compute_diff("line 1\\nline 2\\nline 3", "line 1\\nline 3")
    >>> d.added, d.removed, d.unchanged
    (0, 1, 2)
    >>> d.exit_code
    2

Tags:
    diff, lcs, drift-detection, prompts
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

RUN_ID_RE = re.compile(r"\b\d{8}-[0-9a-f]{6}\b")
TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\S*")

RUN_ID_TOKEN = "<RUN_ID>"
TIMESTAMP_TOKEN = "<TIMESTAMP>"

EXIT_NO_CHANGES = 0
EXIT_CHANGES = 2


class DiffLineType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


@dataclass(frozen=True, slots=True)
class DiffLine:
    """One line of diff output.

    ``line_number`` is 1-based: the new-text index for added/context lines,
    the old-text index for removed lines.
    """

    type: DiffLineType
    line_number: int
    text: str


@dataclass(frozen=True, slots=True)
class DiffResult:
    added: int
    removed: int
    unchanged: int
    lines: tuple[DiffLine, ...] = ()
    snapshot_id: str = ""

    @property
    def has_changes(self) -> bool:
        return self.added > 0 or self.removed > 0

    @property
    def exit_code(self) -> int:
        """0 when identical, 2 when different (1 is left for hard failures)."""
        return EXIT_CHANGES if self.has_changes else EXIT_NO_CHANGES

    def to_dict(self) -> dict[str, Any]:
        return {
            "snapshotId": self.snapshot_id,
            "hasChanges": self.has_changes,
            "added": self.added,
            "removed": self.removed,
            "unchanged": self.unchanged,
            "lines": [
                {"type": line.type.value, "lineNumber": line.line_number, "text": line.text}
                for line in self.lines
            ],
        }


def normalize_for_diff(text: str) -> str:
    """Replace run ids and ISO-8601 timestamps with fixed tokens."""
    text = RUN_ID_RE.sub(RUN_ID_TOKEN, text)
    return TIMESTAMP_RE.sub(TIMESTAMP_TOKEN, text)


def _lines_equal(a: str, b: str) -> bool:
    return a.rstrip() == b.rstrip()


def compute_diff(old_text: str, new_text: str, snapshot_id: str = "") -> DiffResult:
    old = old_text.split("\n")
    new = new_text.split("\n")
    m, n = len(old), len(new)

    # dp[i][j] = LCS length of old[:i] and new[:j]
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if _lines_equal(old[i - 1], new[j - 1]):
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    lines: list[DiffLine] = []
    i, j = m, n
    while i > 0 or j > 0:
        if i > 0 and j > 0 and _lines_equal(old[i - 1], new[j - 1]):
            lines.append(DiffLine(DiffLineType.CONTEXT, j, new[j - 1]))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            lines.append(DiffLine(DiffLineType.ADDED, j, new[j - 1]))
            j -= 1
        else:
            lines.append(DiffLine(DiffLineType.REMOVED, i, old[i - 1]))
            i -= 1
    lines.reverse()

    added = sum(1 for line in lines if line.type is DiffLineType.ADDED)
    removed = sum(1 for line in lines if line.type is DiffLineType.REMOVED)
    return DiffResult(
        added=added,
        removed=removed,
        unchanged=len(lines) - added - removed,
        lines=tuple(lines),
        snapshot_id=snapshot_id,
    )


_MARKERS = {
    DiffLineType.ADDED: "+ ",
    DiffLineType.REMOVED: "- ",
    DiffLineType.CONTEXT: "  ",
}


def format_diff(diff: DiffResult, context_lines: int = 3) -> str:
    """Render changed lines with ``context_lines`` of surrounding context.

    Gaps between hunks are marked with ``  ...``.
    """
    if not diff.has_changes:
        return "No differences found."

    output = []
    if diff.snapshot_id:
        output.append(f"─── Diff against snapshot: {diff.snapshot_id} ───")
    output.append(f"  - {diff.removed} removed  + {diff.added} added  {diff.unchanged} unchanged")
    output.append("")

    shown: set[int] = set()
    last = len(diff.lines) - 1
    for index, line in enumerate(diff.lines):
        if line.type is not DiffLineType.CONTEXT:
            shown.update(range(max(0, index - context_lines), min(last, index + context_lines) + 1))

    previous = -1
    for index in sorted(shown):
        if previous != -1 and index > previous + 1:
            output.append("  ...")
        previous = index
        line = diff.lines[index]
        output.append(f"{_MARKERS[line.type]}{line.text}")

    return "\n".join(output)


__all__ = [
    "DiffLineType",
    "DiffLine",
    "DiffResult",
    "normalize_for_diff",
    "compute_diff",
    "format_diff",
]
