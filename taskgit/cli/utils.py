"""Shared utility functions for CLI commands."""

import logging
import sys

import typer

from taskgit.git.runner import OUTPUT_ENCODING, OUTPUT_ERRORS
from taskgit.hunks import DiffFileRecord, FileOutcome, FileResult, HunkDecider


def configure_logging(debug: bool = False) -> None:
    """Send library log records to stderr.

    Args:
        debug: Show DEBUG records (git commands, cache activity).
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


# Hunk line prefix -> foreground color
_HUNK_LINE_COLORS = {
    "@@": typer.colors.CYAN,
    "+": typer.colors.GREEN,
    "-": typer.colors.RED,
}


def printable(text: str) -> str:
    """Make decoded git output safe to echo.

    Bytes that were not valid UTF-8 are shown as replacement characters;
    the patch text itself is left untouched.
    """
    return text.encode(OUTPUT_ENCODING, OUTPUT_ERRORS).decode(OUTPUT_ENCODING, "replace")


def colorize_hunk(hunk: str) -> str:
    """Color a hunk like git diff: cyan marker, green additions, red removals.

    Context lines and "\\ No newline at end of file" markers stay plain.

    Args:
        hunk: Hunk text starting with its "@@" line.

    Returns:
        Hunk text with ANSI styles applied per line.
    """
    colorized = []
    for line in hunk.split("\n"):
        for prefix, fg in _HUNK_LINE_COLORS.items():
            if line.startswith(prefix):
                colorized.append(typer.style(line, fg=fg))
                break
        else:
            colorized.append(line)
    return "\n".join(colorized)


def make_prompt_decider(color: bool = True) -> HunkDecider:
    """Build a decider that shows each hunk and asks the operator.

    The file header is printed before the first hunk of every file.

    Args:
        color: Whether to colorize the output.

    Returns:
        HunkDecider backed by typer.confirm.
    """

    def header(text: str) -> str:
        text = printable(text)
        return typer.style(text, bold=True) if color else text

    def decide(record: DiffFileRecord, index: int, hunk: str) -> bool:
        if index == 0:
            typer.echo("")
            typer.echo(header(f"diff --git {record.file_path}"))
            typer.echo(f"In file {printable(record.file_name)}")
            typer.echo(header(record.a_file_line))
            typer.echo(header(record.b_file_line))
            typer.echo("")

        text = printable(hunk.rstrip("\n"))
        typer.echo(f"[hunk {index + 1}/{len(record.hunks)}]")
        typer.echo(colorize_hunk(text) if color else text)
        return typer.confirm("Add this hunk?", default=False)

    return decide


def format_result(result: FileResult) -> str:
    """One-line summary of what happened to a file."""
    if result.outcome == FileOutcome.APPLIED:
        line = f"  staged     {result.file_name} ({result.accepted} accepted, {result.ignored} left unstaged)"
        if result.error:
            line += f"\n             warning: rejected hunks not restored (patch cache {result.hash})"
        return line
    if result.outcome == FileOutcome.RECOVERED:
        return f"  recovered  {result.file_name} (accepted hunks did not apply, staged in full)"
    return f"  skipped    {result.file_name}"
