"""Patch parser tests.

Pure function tests: no network, no config.
"""

from normalize.patch import parse_patch


def _numbers(patch: str) -> list[int]:
    return [c.line_number for c in parse_patch(patch)]


def _types(patch: str) -> list[str]:
    return [c.type for c in parse_patch(patch)]


class TestParsePatch:
    def test_remove_freezes_counter_add_and_context_advance(self):
        # Regression case: the counter starts at the hunk's new-file line 5.
        # " a" is emitted at 5 and advances; "-b" is emitted at 6 without
        # advancing; "+c" is emitted at 6 and advances; " d" lands on 7.
        patch = "@@ -1,3 +5,3 @@\n a\n-b\n+c\n d"
        assert _types(patch) == ["context", "remove", "add", "context"]
        assert _numbers(patch) == [5, 6, 6, 7]

    def test_consecutive_removes_share_a_line_number(self):
        patch = "@@ -10,3 +10,1 @@\n-one\n-two\n-three\n+replacement"
        assert _numbers(patch) == [10, 10, 10, 10]

    def test_hunk_header_resets_counter(self):
        patch = (
            "@@ -1,2 +1,2 @@\n"
            " first\n"
            "+added\n"
            "@@ -40,2 +41,2 @@\n"
            " later\n"
            "+also added\n"
        )
        assert _numbers(patch) == [1, 2, 41, 42]

    def test_hunk_header_without_counts(self):
        assert _numbers("@@ -3 +7 @@\n+x") == [7]

    def test_hunk_header_with_section_heading(self):
        patch = "@@ -12,6 +12,7 @@ export function handleSubmit() {\n+  validate();"
        changes = parse_patch(patch)
        assert changes[0].line_number == 12
        assert changes[0].content == "  validate();"

    def test_strips_prefix_from_content(self):
        changes = parse_patch("@@ -1,1 +1,1 @@\n-old value\n+new value")
        assert [c.content for c in changes] == ["old value", "new value"]

    def test_ignores_lines_without_a_diff_prefix(self):
        patch = "@@ -1,1 +1,2 @@\n a\n\\ No newline at end of file\n+b"
        assert _types(patch) == ["context", "add"]

    def test_empty_patch_returns_no_changes(self):
        assert parse_patch("") == []

    def test_truncates_to_twenty_records(self):
        patch = "@@ -1,0 +1,30 @@\n" + "\n".join(f"+line {i}" for i in range(30))
        changes = parse_patch(patch)
        assert len(changes) == 20
        assert changes[-1].content == "line 19"
        assert changes[-1].line_number == 20

    def test_exactly_twenty_lines_is_not_truncated(self):
        patch = "@@ -1,20 +1,20 @@\n" + "\n".join(f" ctx {i}" for i in range(20))
        assert len(parse_patch(patch)) == 20
