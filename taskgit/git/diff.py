"""Git diff utilities.

Contains:
- DiffOptions: Options for the git diff command
- build_diff_args: Translate DiffOptions into git diff arguments
- get_diff: Run git diff and return the raw unified diff text
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

from taskgit.git.runner import _run_git_command


DiffAlgorithm = Literal["minimal", "patience", "histogram"]


class DiffOptions(BaseModel):
    """Options for the git diff command."""

    branch1: Optional[str] = None
    branch2: Optional[str] = None
    commit1: Optional[str] = None
    commit2: Optional[str] = None
    file: Optional[str] = None  # Limit the diff to a single path
    ignore_all_space: bool = False
    ignore_blank_lines: bool = False
    ignore_space_at_eol: bool = False
    ignore_space_change: bool = False
    algorithm: Optional[DiffAlgorithm] = None
    unified: Optional[int] = Field(default=None, ge=0)  # Context lines (-U)


# (field, flag) in the order they are appended to the command
_WHITESPACE_FLAGS = [
    ("ignore_all_space", "--ignore-all-space"),
    ("ignore_blank_lines", "--ignore-blank-lines"),
    ("ignore_space_at_eol", "--ignore-space-at-eol"),
    ("ignore_space_change", "--ignore-space-change"),
]


def build_diff_args(options: DiffOptions) -> list[str]:
    """Build the git diff argument list for the given options.

    Color and external diff drivers are always disabled so the output is
    plain unified diff text that the hunk parser can consume.

    Args:
        options: Options for the git diff command.

    Returns:
        Arguments to pass to git (without the leading "git").
    """
    args = ["diff", "--no-color", "--no-ext-diff"]

    for field_name, flag in _WHITESPACE_FLAGS:
        if getattr(options, field_name):
            args.append(flag)

    if options.algorithm:
        args.append(f"--{options.algorithm}")

    if options.unified is not None:
        args.append(f"--unified={options.unified}")

    # Revision range
    if options.branch1 and options.branch2:
        if options.commit1 and options.commit2:
            # Symmetric difference: changes since the merge base
            args.append(f"{options.branch1}...{options.branch2}")
        else:
            args.append(f"{options.branch1}..{options.branch2}")
    elif options.commit1 and options.commit2:
        args.extend([options.commit1, options.commit2])

    if options.file:
        args.extend(["--", options.file])

    return args


def get_diff(options: DiffOptions, cwd: Optional[Path] = None) -> str:
    """Run git diff with the given options.

    Args:
        options: Options for the git diff command.
        cwd: Directory to run git in.

    Returns:
        The raw unified diff text, byte-for-byte as git printed it.

    Raises:
        GitError: If the command fails.
    """
    return _run_git_command(build_diff_args(options), cwd=cwd, strip=False)
