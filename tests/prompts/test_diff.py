"""
Tests for promptspine.prompts.diff.

Tests cover:
- LCS line diff counts and ordering
- Asymmetry between diff(A, B) and diff(B, A)
- Trailing-whitespace tolerance
- Normalization of run ids and timestamps
- Text formatting with context lines
"""

from promptspine.prompts.diff import (
    DiffLineType,
    compute_diff,
    format_diff,
    normalize_for_diff,
)


class TestComputeDiff:
    """Test compute_diff()."""

    def test_identical(self):
        result = compute_diff("a\nb\nc", "a\nb\nc")
        assert (result.added, result.removed, result.unchanged) == (0, 0, 3)
        assert not result.has_changes
        assert result.exit_code == 0

    def test_removed_line(self):
        result = compute_diff("line 1\nline 2\nline 3", "line 1\nline 3")
        assert result.removed == 1
        assert result.added == 0
        assert result.unchanged == 2
        removed = [line for line in result.lines if line.type is DiffLineType.REMOVED]
        assert removed[0].text == "line 2"
        assert removed[0].line_number == 2
        assert result.exit_code == 2

    def test_asymmetric(self):
        a = "one\ntwo"
        b = "one\ninserted\ntwo"
        forward = compute_diff(a, b)
        backward = compute_diff(b, a)
        assert forward.added == backward.removed == 1
        assert forward.removed == backward.added == 0

    def test_trailing_whitespace_ignored(self):
        assert not compute_diff("text   \nmore", "text\nmore\t").has_changes

    def test_leading_whitespace_counts(self):
        assert compute_diff("text", "  text").has_changes

    def test_line_order(self):
        result = compute_diff("a\nb\nc", "a\nx\nc")
        assert [(line.type, line.text) for line in result.lines] == [
            (DiffLineType.CONTEXT, "a"),
            (DiffLineType.REMOVED, "b"),
            (DiffLineType.ADDED, "x"),
            (DiffLineType.CONTEXT, "c"),
        ]

    def test_to_dict(self):
        data = compute_diff("a", "b", snapshot_id="a1b2c3d4e5f6").to_dict()
        assert data["snapshotId"] == "a1b2c3d4e5f6"
        assert data["hasChanges"] is True
        assert data["lines"][0] == {"type": "removed", "lineNumber": 1, "text": "a"}


class TestNormalizeForDiff:
    """Test normalize_for_diff()."""

    def test_run_ids_differ_only(self):
        old = normalize_for_diff("Run ID: 20240115-a1b2c3")
        new = normalize_for_diff("Run ID: 20240116-ffffff")
        assert old == new == "Run ID: <RUN_ID>"
        assert not compute_diff(old, new).has_changes

    def test_timestamps(self):
        text = normalize_for_diff("Started 2025-01-01T12:00:00.000Z today")
        assert text == "Started <TIMESTAMP> today"

    def test_other_text_untouched(self):
        assert normalize_for_diff("version 1.2.3") == "version 1.2.3"


class TestFormatDiff:
    """Test format_diff()."""

    def test_no_changes(self):
        assert format_diff(compute_diff("a", "a")) == "No differences found."

    def test_header_and_markers(self):
        text = format_diff(compute_diff("a\nb", "a\nc", snapshot_id="a1b2c3d4e5f6"))
        lines = text.split("\n")
        assert lines[0] == "─── Diff against snapshot: a1b2c3d4e5f6 ───"
        assert lines[1] == "  - 1 removed  + 1 added  1 unchanged"
        assert lines[2] == ""
        assert lines[3:] == ["  a", "- b", "+ c"]

    def test_gaps_collapsed(self):
        old = "\n".join(str(i) for i in range(20))
        new = old.replace("10", "ten")
        lines = format_diff(compute_diff(old, new), context_lines=1).split("\n")
        assert lines[2:] == ["  9", "- 10", "+ ten", "  11"]

    def test_separate_hunks_marked(self):
        old = "\n".join(str(i) for i in range(20))
        new = old.replace("2", "two", 1).replace("17", "seventeen")
        lines = format_diff(compute_diff(old, new), context_lines=0).split("\n")
        assert "  ..." in lines
