"""Git subprocess layer for taskgit.

This package provides the git collaborators used by the hunk engine:
- exceptions: GitError, CommandExecutionError, NoDiffError
- runner: _run_git_command, run_git, get_repo_root
- diff: DiffOptions, build_diff_args, get_diff
"""

# Exceptions
from taskgit.git.exceptions import (
    CommandExecutionError,
    GitError,
    NoDiffError,
)

# Runner utilities
from taskgit.git.runner import (
    _run_git_command,
    get_repo_root,
    decode_output,
    run_git,
)

# Diff utilities
from taskgit.git.diff import (
    DiffOptions,
    build_diff_args,
    get_diff,
)


__all__ = [
    # Exceptions
    "GitError",
    "CommandExecutionError",
    "NoDiffError",
    # Runner
    "decode_output",
    "_run_git_command",
    "run_git",
    "get_repo_root",
    # Diff
    "DiffOptions",
    "build_diff_args",
    "get_diff",
]
