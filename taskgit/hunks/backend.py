"""Repository backends for the taskgit hunk engine.

Contains:
- ApplyResult: Outcome of applying a patch file
- RepositoryBackend: The working tree operations the executor needs
- GitBackend: RepositoryBackend implemented with git subprocesses
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from taskgit.git.runner import _run_git_command, run_git


@dataclass
class ApplyResult:
    """Outcome of applying a patch file."""

    success: bool
    stderr: str = ""


class RepositoryBackend(Protocol):
    """Working tree and index operations used by the selection executor."""

    def revert_file(self, file_name: str) -> None:
        """Restore a file in the working tree to its committed state."""
        ...

    def apply_patch(self, patch_path: Path) -> ApplyResult:
        """Apply a patch file to the working tree."""
        ...

    def stage_file(self, file_name: str) -> None:
        """Add a file to the index."""
        ...


class GitBackend:
    """RepositoryBackend that shells out to git.

    Args:
        repo_root: Repository root; file names are relative to it.
    """

    def __init__(self, repo_root: Optional[Path] = None):
        self.repo_root = repo_root

    def revert_file(self, file_name: str) -> None:
        _run_git_command(["checkout", "--", file_name], cwd=self.repo_root)

    def apply_patch(self, patch_path: Path) -> ApplyResult:
        result = run_git(["apply", str(patch_path)], cwd=self.repo_root)
        return ApplyResult(success=result.returncode == 0, stderr=result.stderr.strip())

    def stage_file(self, file_name: str) -> None:
        _run_git_command(["add", "--", file_name], cwd=self.repo_root)
