"""Data models for the taskgit hunk engine.

Contains:
- DiffFileRecord: One file of a unified diff, its hunks and the operator's
  selection, with the patch reconstruction methods
- CachedPatch: A scratch file and the patch text written to it
- CacheEntry: The scratch patches of one in-flight selection
- FileOutcome: What happened to a file during selection
- FileResult: Per-file report returned by the selection executor
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


FILE_MARKER = "diff --git "
HUNK_MARKER = "@@"


@dataclass
class DiffFileRecord:
    """Diff for a single file, split into independently selectable hunks."""

    file_path: str  # "a/<path> b/<path>" as it appeared after the marker
    file_name: str  # Path relative to the repository root
    index_line: str
    a_file_line: str
    b_file_line: str
    hunks: list[str] = field(default_factory=list)
    extra_header_lines: list[str] = field(default_factory=list)
    accepted_hunks: list[str] = field(default_factory=list)
    ignored_hunks: list[str] = field(default_factory=list)

    @property
    def is_binary(self) -> bool:
        """Whether git reported this file as binary."""
        header_lines = [self.index_line, self.a_file_line, self.b_file_line] + self.extra_header_lines
        return any(
            line.startswith("Binary files") or "GIT binary patch" in line
            for line in header_lines
        )

    @property
    def is_new_file(self) -> bool:
        """Whether the diff creates this file."""
        header_lines = [self.index_line, self.a_file_line, self.b_file_line] + self.extra_header_lines
        return any(line.startswith("new file mode") for line in header_lines)

    def header(self) -> str:
        """Return the file-level header shared by every reconstructed patch."""
        lines = [
            f"{FILE_MARKER}{self.file_path}",
            self.index_line,
            self.a_file_line,
            self.b_file_line,
        ]
        lines.extend(self.extra_header_lines)
        return "".join(f"{line}\n" for line in lines)

    def build_patch(self, hunks: list[str]) -> Optional[str]:
        """Build a standalone patch for a subset of this file's hunks.

        Every subset reuses the original file headers, so the result stays
        appliable by ``git apply`` even with hunks left out.

        Args:
            hunks: Hunk texts to include, in order.

        Returns:
            Patch content ending in exactly one newline, or None if
            ``hunks`` is empty.
        """
        if not hunks:
            return None
        patch = self.header() + "".join(hunks)
        # git apply requires the patch to end with a newline
        return patch.rstrip("\n") + "\n"

    def get_total_patch(self) -> Optional[str]:
        """Patch containing every hunk of the file."""
        return self.build_patch(self.hunks)

    def get_accepted_patch(self) -> Optional[str]:
        """Patch containing only the accepted hunks."""
        return self.build_patch(self.accepted_hunks)

    def get_ignored_patch(self) -> Optional[str]:
        """Patch containing only the rejected hunks."""
        return self.build_patch(self.ignored_hunks)


@dataclass
class CachedPatch:
    """A patch document persisted to a scratch file."""

    path: Path
    content: str


@dataclass
class CacheEntry:
    """Scratch patches for one file while its selection is being applied."""

    hash: str
    original_state: CachedPatch
    accepted_changes: CachedPatch
    ignored_changes: Optional[CachedPatch] = None

    def patches(self) -> list[CachedPatch]:
        """Return the two or three patches held by this entry."""
        patches = [self.original_state, self.accepted_changes]
        if self.ignored_changes is not None:
            patches.append(self.ignored_changes)
        return patches


class FileOutcome(str, Enum):
    """Terminal state of a file after selection."""

    SKIPPED = "skipped"  # No hunks accepted, repository untouched
    APPLIED = "applied"  # Accepted hunks staged, rejected hunks left unstaged
    RECOVERED = "recovered"  # Accepted patch failed, original restored and staged in full


@dataclass
class FileResult:
    """Per-file report from the selection executor."""

    file_name: str
    outcome: FileOutcome
    accepted: int = 0
    ignored: int = 0
    hash: Optional[str] = None
    error: Optional[str] = None
