"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- CommandExecutionError: A git subprocess exited with a non-zero status
- NoDiffError: Raised when git diff produces no changes
"""

from typing import Optional


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class CommandExecutionError(GitError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        command: list[str],
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class NoDiffError(GitError):
    """Raised when there are no changes to select from."""

    pass
