"""Git command runner and repository utilities.

Contains:
- decode_output: Decode git output without losing bytes or carriage returns
- _run_git_command: Run a git command and return its output
- run_git: Run a git command without raising on a non-zero exit status
- get_repo_root: Get the root directory of the current git repository
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from taskgit.git.exceptions import CommandExecutionError, GitError

logger = logging.getLogger(__name__)


# Undecodable bytes become lone surrogates and encode back unchanged
OUTPUT_ENCODING = "utf-8"
OUTPUT_ERRORS = "surrogateescape"


def decode_output(data: Optional[bytes]) -> str:
    """Decode raw git output.

    Git is run in bytes mode, so "\\r\\n" is not translated and file
    content in any encoding survives a decode/encode round trip.

    Args:
        data: Raw stdout or stderr (None is treated as empty).

    Returns:
        The decoded text.
    """
    if not data:
        return ""
    return data.decode(OUTPUT_ENCODING, OUTPUT_ERRORS)


def _run_git_command(
    args: list[str], cwd: Optional[Path] = None, strip: bool = True
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run the command in (defaults to the current one).
        strip: Whether to strip surrounding whitespace from stdout. Patch
            text must be returned untouched, so diff callers pass False.

    Returns:
        The stdout of the git command.

    Raises:
        CommandExecutionError: If the command fails.
        GitError: If git is not installed.
    """
    command = ["git"] + args
    logger.debug("Running %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            check=True,
            cwd=cwd,
        )
    except subprocess.CalledProcessError as e:
        stderr = decode_output(e.stderr).strip()
        raise CommandExecutionError(
            f"Git command failed: git {' '.join(args)}\n{stderr}",
            command=command,
            returncode=e.returncode,
            stderr=stderr,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")

    stdout = decode_output(result.stdout)
    return stdout.strip() if strip else stdout


def run_git(args: list[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """Run a git command and return the completed process.

    Unlike _run_git_command, a non-zero exit status is not an error here;
    callers inspect ``returncode`` themselves. ``stdout`` and ``stderr`` are
    decoded with decode_output.

    Raises:
        GitError: If git is not installed.
    """
    command = ["git"] + args
    logger.debug("Running %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            cwd=cwd,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")

    return subprocess.CompletedProcess(
        args=command,
        returncode=result.returncode,
        stdout=decode_output(result.stdout),
        stderr=decode_output(result.stderr),
    )


def get_repo_root() -> Path:
    """Get the root directory of the current git repository.

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"])
        return Path(root)
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")
