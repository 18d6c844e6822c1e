"""Scratch patch cache for the taskgit hunk engine.

Contains:
- get_default_patch_dir: Default scratch directory under the system temp dir
- compute_patch_hash: Build a unique identifier for one cache entry
- PatchCache: Writes, looks up and clears the scratch patches of a selection
- remove_stale_patches: Delete scratch patches left behind by crashed runs
"""

import hashlib
import itertools
import logging
import tempfile
import time
from pathlib import Path
from typing import Optional

from taskgit.git.runner import OUTPUT_ENCODING, OUTPUT_ERRORS
from taskgit.hunks.models import CacheEntry, CachedPatch

logger = logging.getLogger(__name__)


ORIGINAL_SUFFIX = "-or.patch"
ACCEPTED_SUFFIX = "-ac.patch"
IGNORED_SUFFIX = "-ig.patch"


def get_default_patch_dir() -> Path:
    """Return <tempdir>/taskgit/patch."""
    return Path(tempfile.gettempdir()) / "taskgit" / "patch"


def compute_patch_hash(file_path: str, salt: str) -> str:
    """Compute the SHA1 identifier of a cache entry.

    Args:
        file_path: The file's "a/... b/..." path pair.
        salt: Value that makes the hash unique per call.

    Returns:
        SHA1 hex digest.
    """
    return hashlib.sha1(f"{file_path}{salt}".encode(), usedforsecurity=False).hexdigest()


class PatchCache:
    """In-memory table of scratch patches, keyed by hash.

    Each entry owns two or three files in ``patch_dir`` from creation until
    ``clear`` is called for its hash.
    """

    def __init__(self, patch_dir: Optional[Path] = None):
        self.patch_dir = Path(patch_dir) if patch_dir is not None else get_default_patch_dir()
        self._entries: dict[str, CacheEntry] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, hash: str) -> bool:
        return hash in self._entries

    def _ensure_dir(self) -> Path:
        self.patch_dir.mkdir(parents=True, exist_ok=True)
        return self.patch_dir

    def _next_salt(self) -> str:
        # Nanosecond clock plus a counter: unique even within one clock tick
        return f"{time.time_ns():x}-{next(self._counter)}"

    def create_entry(
        self,
        file_path: str,
        total_patch: str,
        accepted_patch: str,
        ignored_patch: Optional[str] = None,
    ) -> str:
        """Persist the patches of one file selection.

        Args:
            file_path: The file's "a/... b/..." path pair.
            total_patch: Patch with every hunk (used for recovery).
            accepted_patch: Patch with the accepted hunks.
            ignored_patch: Patch with the rejected hunks, if any.

        Returns:
            The hash identifying the new entry.

        Raises:
            OSError: If a scratch file cannot be written.
        """
        hash = compute_patch_hash(file_path, self._next_salt())
        base = self._ensure_dir() / hash

        entry = CacheEntry(
            hash=hash,
            original_state=CachedPatch(Path(f"{base}{ORIGINAL_SUFFIX}"), total_patch),
            accepted_changes=CachedPatch(Path(f"{base}{ACCEPTED_SUFFIX}"), accepted_patch),
        )
        if ignored_patch is not None:
            entry.ignored_changes = CachedPatch(Path(f"{base}{IGNORED_SUFFIX}"), ignored_patch)

        for patch in entry.patches():
            # newline="" keeps "\r" untranslated; surrogateescape restores non-UTF-8 bytes
            with open(patch.path, "w", encoding=OUTPUT_ENCODING, errors=OUTPUT_ERRORS, newline="") as f:
                f.write(patch.content)

        self._entries[hash] = entry
        logger.debug("Cached %d patch file(s) for %s as %s", len(entry.patches()), file_path, hash)
        return hash

    def lookup(self, hash: str) -> Optional[CacheEntry]:
        """Return the entry stored under ``hash``, or None."""
        return self._entries.get(hash)

    def clear(self, hash: str) -> bool:
        """Delete the scratch files of an entry and forget it.

        Files already removed by someone else are ignored.

        Args:
            hash: The entry to clear.

        Returns:
            False if no entry exists for ``hash``, True otherwise.

        Raises:
            OSError: If a file exists but cannot be deleted.
        """
        entry = self._entries.get(hash)
        if entry is None:
            return False

        for patch in entry.patches():
            patch.path.unlink(missing_ok=True)

        del self._entries[hash]
        logger.debug("Cleared patch cache entry %s", hash)
        return True

    def release(self, hash: str) -> Optional[CacheEntry]:
        """Forget an entry but keep its scratch files on disk.

        Used when a selection fails midway and the patches are the only
        copy of the operator's changes. ``remove_stale_patches`` deletes
        them later.

        Returns:
            The released entry, or None if ``hash`` is unknown.
        """
        return self._entries.pop(hash, None)

    def clear_all(self) -> int:
        """Clear every in-flight entry.

        Returns:
            Number of entries cleared.
        """
        hashes = list(self._entries)
        for hash in hashes:
            self.clear(hash)
        return len(hashes)


def remove_stale_patches(patch_dir: Path) -> int:
    """Delete scratch patches left in ``patch_dir`` by interrupted runs.

    Args:
        patch_dir: Scratch directory to sweep.

    Returns:
        Number of files removed.
    """
    if not patch_dir.exists():
        return 0

    removed = 0
    for suffix in (ORIGINAL_SUFFIX, ACCEPTED_SUFFIX, IGNORED_SUFFIX):
        for path in patch_dir.glob(f"*{suffix}"):
            try:
                path.unlink()
                removed += 1
            except FileNotFoundError:
                pass
    return removed
