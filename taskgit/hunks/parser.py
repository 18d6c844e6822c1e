"""Diff parser for the taskgit hunk engine.

Contains functions for parsing unified diff output:
- parse_git_diff_output: Split git diff output into per-file hunk records
- _split_lines: Split diff text on newlines only
- _new_record: Build a DiffFileRecord from a file marker and its header lines
"""

from typing import Optional

from taskgit.hunks.models import FILE_MARKER, HUNK_MARKER, DiffFileRecord


def _split_lines(diff_output: str) -> list[str]:
    """Split diff text into lines without their terminators.

    Only "\\n" separates lines; a carriage return or form feed inside a
    line is content and must survive reconstruction.
    """
    lines = diff_output.split("\n")
    if lines and lines[-1] == "":
        # Text ended with a newline, nothing follows it
        lines.pop()
    return lines


def _new_record(lines: list[str], i: int) -> DiffFileRecord:
    """Build a record from the marker at ``lines[i]`` and the three lines after it.

    Header lines missing from truncated input are treated as empty.
    """

    def at(offset: int) -> str:
        return lines[i + offset] if i + offset < len(lines) else ""

    file_path = lines[i][len(FILE_MARKER):]
    # "a/src/x.py b/src/x.py" -> "src/x.py"
    tokens = file_path.split()
    first = tokens[0] if tokens else ""
    file_name = first[2:] if first.startswith("a/") else first

    return DiffFileRecord(
        file_path=file_path,
        file_name=file_name,
        index_line=at(1),
        a_file_line=at(2),
        b_file_line=at(3),
    )


def parse_git_diff_output(diff_output: str) -> list[DiffFileRecord]:
    """Parse unified diff output into one record per file.

    Each hunk keeps its "@@" marker line and every line up to the next
    hunk or file marker, each terminated by a newline, so that joining a
    record's hunks after its header reproduces the original file block.

    Lines between a file's three header lines and its first hunk (mode
    lines, "+++" on new-file diffs, binary notices) are kept as extra
    header lines. Anything before the first file marker is ignored.

    Args:
        diff_output: Raw output from git diff

    Returns:
        List of DiffFileRecord objects in the order they appear
    """
    records: list[DiffFileRecord] = []
    current: Optional[DiffFileRecord] = None
    current_hunk = ""

    lines = _split_lines(diff_output)
    i = 0
    while i < len(lines):
        line = lines[i]

        if line.startswith(FILE_MARKER):
            if current is not None:
                current.hunks.append(current_hunk)
            current_hunk = ""

            current = _new_record(lines, i)
            records.append(current)
            i += 4
            continue

        if line.startswith(HUNK_MARKER) and current is not None:
            current.hunks.append(current_hunk)
            current_hunk = f"{line}\n"
        elif current is not None:
            if current_hunk:
                current_hunk += f"{line}\n"
            else:
                current.extra_header_lines.append(line)
        i += 1

    if current is not None:
        current.hunks.append(current_hunk)

    for record in records:
        record.hunks = [hunk for hunk in record.hunks if hunk]

    return records
