"""Tests for taskgit.hunks.parser module."""

import re

from taskgit.hunks import parse_git_diff_output


def _file_blocks(diff_text):
    """Split raw diff text into its per-file blocks."""
    return [b for b in re.split(r"(?=^diff --git )", diff_text, flags=re.MULTILINE) if b]


class TestParseGitDiffOutput:
    """Tests for parse_git_diff_output function."""

    def test_parses_multiple_files(self, sample_diff):
        """Test one record per file, in order."""
        records = parse_git_diff_output(sample_diff)

        assert len(records) == 2
        assert records[0].file_name == "src/a.txt"
        assert records[1].file_name == "docs/readme.md"

    def test_parses_multiple_hunks(self, sample_diff):
        """Test hunks are split at every @@ marker."""
        records = parse_git_diff_output(sample_diff)

        assert len(records[0].hunks) == 3
        assert len(records[1].hunks) == 1
        assert all(h.startswith("@@") for h in records[0].hunks)

    def test_header_lines(self, sample_diff):
        """Test the three header lines are kept verbatim."""
        record = parse_git_diff_output(sample_diff)[0]

        assert record.file_path == "a/src/a.txt b/src/a.txt"
        assert record.index_line == "index 3b18e51..a1c2d3e 100644"
        assert record.a_file_line == "--- a/src/a.txt"
        assert record.b_file_line == "+++ b/src/a.txt"
        assert record.extra_header_lines == []

    def test_hunk_text_keeps_every_line(self, sample_diff):
        """Test each hunk holds its marker and body, newline-terminated."""
        record = parse_git_diff_output(sample_diff)[0]

        assert record.hunks[2] == (
            "@@ -25,4 +25,4 @@\n"
            " line 25\n"
            " line 26\n"
            " line 27\n"
            "-line 28\n"
            "+line twenty-eight\n"
        )

    def test_hunk_marker_with_function_context(self, sample_diff):
        """Test text after the closing @@ stays on the marker line."""
        record = parse_git_diff_output(sample_diff)[1]

        assert record.hunks[0].startswith("@@ -1,3 +1,4 @@ Title\n")

    def test_selection_starts_empty(self, sample_diff):
        """Test accepted and ignored lists start empty."""
        for record in parse_git_diff_output(sample_diff):
            assert record.accepted_hunks == []
            assert record.ignored_hunks == []

    def test_empty_diff(self):
        """Test parsing empty diff."""
        assert parse_git_diff_output("") == []

    def test_text_before_first_file_is_ignored(self, sample_diff):
        """Test stray lines before the first file marker are dropped."""
        records = parse_git_diff_output("warning: something\n" + sample_diff)

        assert len(records) == 2
        assert len(records[0].hunks) == 3

    def test_file_without_hunks(self):
        """Test a mode-only change yields a record with no hunks."""
        diff = (
            "diff --git a/run.sh b/run.sh\n"
            "old mode 100644\n"
            "new mode 100755\n"
            "index 1234567..1234567\n"
        )
        records = parse_git_diff_output(diff)

        assert len(records) == 1
        assert records[0].hunks == []
        assert records[0].get_total_patch() is None

    def test_new_file_extra_header_line(self, new_file_diff):
        """Test the fourth header line of a new-file diff is kept as a header."""
        record = parse_git_diff_output(new_file_diff)[0]

        assert record.index_line == "new file mode 100644"
        assert record.a_file_line == "index 0000000..e69de29"
        assert record.b_file_line == "--- /dev/null"
        assert record.extra_header_lines == ["+++ b/src/new.py"]
        assert len(record.hunks) == 1
        assert "+++" not in record.hunks[0]

    def test_binary_file(self, binary_diff):
        """Test a binary file is parsed with no hunks and flagged."""
        record = parse_git_diff_output(binary_diff)[0]

        assert record.hunks == []
        assert record.is_binary is True

    def test_truncated_header_does_not_fail(self):
        """Test missing header lines are treated as empty."""
        records = parse_git_diff_output("diff --git a/x b/x\nindex 1..2\n")

        assert len(records) == 1
        assert records[0].index_line == "index 1..2"
        assert records[0].a_file_line == ""
        assert records[0].b_file_line == ""
        assert records[0].hunks == []

    def test_adjacent_hunk_markers(self):
        """Test a marker with no body is still a hunk of its own."""
        diff = (
            "diff --git a/x b/x\n"
            "index 1..2 100644\n"
            "--- a/x\n"
            "+++ b/x\n"
            "@@ -1 +1 @@\n"
            "@@ -5 +5 @@\n"
            "-a\n"
            "+b\n"
        )
        record = parse_git_diff_output(diff)[0]

        assert record.hunks == ["@@ -1 +1 @@\n", "@@ -5 +5 @@\n-a\n+b\n"]

    def test_carriage_returns_are_content(self):
        """Test only newlines split lines; CRLF content survives."""
        diff = (
            "diff --git a/w.txt b/w.txt\n"
            "index 1..2 100644\n"
            "--- a/w.txt\n"
            "+++ b/w.txt\n"
            "@@ -1 +1 @@\n"
            "-old\r\n"
            "+new\r\n"
        )
        record = parse_git_diff_output(diff)[0]

        assert record.hunks == ["@@ -1 +1 @@\n-old\r\n+new\r\n"]

    def test_no_newline_marker_stays_in_hunk(self):
        """Test the "No newline at end of file" marker belongs to the hunk."""
        diff = (
            "diff --git a/x b/x\n"
            "index 1..2 100644\n"
            "--- a/x\n"
            "+++ b/x\n"
            "@@ -1 +1 @@\n"
            "-a\n"
            "\\ No newline at end of file\n"
            "+b\n"
            "\\ No newline at end of file\n"
        )
        record = parse_git_diff_output(diff)[0]

        assert len(record.hunks) == 1
        assert record.hunks[0].count("\\ No newline at end of file") == 2


class TestRoundTrip:
    """Parsing then rebuilding the total patch reproduces the source."""

    def test_total_patch_matches_source_blocks(self, sample_diff):
        """Test every file block is reproduced byte for byte."""
        records = parse_git_diff_output(sample_diff)

        assert [r.get_total_patch() for r in records] == _file_blocks(sample_diff)

    def test_new_file_round_trip(self, new_file_diff):
        """Test a four-line header survives reconstruction."""
        record = parse_git_diff_output(new_file_diff)[0]

        assert record.get_total_patch() == new_file_diff

    def test_missing_final_newline_is_normalized(self, sample_diff):
        """Test a source without a trailing newline gains exactly one."""
        records = parse_git_diff_output(sample_diff.rstrip("\n"))

        assert records[-1].get_total_patch() == _file_blocks(sample_diff)[-1]
