"""Selection executor for the taskgit hunk engine.

Contains:
- HunkDecider: Callback deciding whether a hunk is accepted
- PatchRecoveryError: The original patch could not be restored
- classify_hunks: Ask for a decision on every hunk of a file
- apply_selection: Stage the accepted hunks of a classified file
- select_hunks: Classify and apply a list of files, one at a time
"""

import logging
from pathlib import Path
from typing import Callable

from taskgit.hunks.backend import RepositoryBackend
from taskgit.hunks.cache import PatchCache
from taskgit.hunks.models import CacheEntry, DiffFileRecord, FileOutcome, FileResult

logger = logging.getLogger(__name__)


# (record, hunk index, hunk text) -> accept?
HunkDecider = Callable[[DiffFileRecord, int, str], bool]


class PatchRecoveryError(Exception):
    """Neither the accepted patch nor the original patch could be applied.

    The file is left reverted to its committed state; the original changes
    remain in ``patch_path``.
    """

    def __init__(self, file_name: str, hash: str, patch_path: Path, stderr: str):
        super().__init__(
            f"Failed to restore {file_name} after a failed partial apply "
            f"(patch cache {hash}): {stderr}\n"
            f"Restore the original changes with: git apply {patch_path}"
        )
        self.file_name = file_name
        self.hash = hash
        self.patch_path = patch_path
        self.stderr = stderr


def classify_hunks(record: DiffFileRecord, decide: HunkDecider) -> None:
    """Sort every hunk of a file into accepted or ignored.

    Decisions are requested in hunk order and each one is recorded before
    the next hunk is presented.

    Args:
        record: The file to classify. Its accepted/ignored lists are filled.
        decide: Callback returning True to accept a hunk.
    """
    for index, hunk in enumerate(record.hunks):
        if decide(record, index, hunk):
            record.accepted_hunks.append(hunk)
        else:
            record.ignored_hunks.append(hunk)


def apply_selection(
    record: DiffFileRecord,
    cache: PatchCache,
    backend: RepositoryBackend,
) -> FileResult:
    """Stage the accepted hunks of a classified file.

    The file is reverted, the accepted patch applied and staged, then the
    rejected hunks are applied back on top as unstaged changes. If the
    accepted patch does not apply, the original patch is applied instead
    and the file is staged with every hunk. The ignored patch is not
    re-applied in that case.

    Args:
        record: A file whose hunks were classified.
        cache: Where the scratch patches are written.
        backend: Repository operations.

    Returns:
        FileResult describing what happened.

    Raises:
        PatchRecoveryError: If the original patch cannot be re-applied.
        OSError: If the scratch patches cannot be written or removed.
    """
    result = FileResult(
        file_name=record.file_name,
        outcome=FileOutcome.SKIPPED,
        accepted=len(record.accepted_hunks),
        ignored=len(record.ignored_hunks),
    )

    accepted_patch = record.get_accepted_patch()
    if accepted_patch is None or record.is_binary:
        logger.debug("No hunks accepted for %s, skipping", record.file_name)
        return result
    if record.is_new_file:
        # git checkout leaves intent-to-add files in place
        logger.warning("%s is a new file; stage it with git add instead", record.file_name)
        return result

    hash = cache.create_entry(
        file_path=record.file_path,
        total_patch=record.get_total_patch(),
        accepted_patch=accepted_patch,
        ignored_patch=record.get_ignored_patch(),
    )
    entry = cache.lookup(hash)
    result.hash = hash

    try:
        _replay(record, entry, backend, result)
    except BaseException:
        # The scratch patches may be the only copy of the changes now
        cache.release(hash)
        logger.error(
            "Selection for %s interrupted; patches kept in %s",
            record.file_name,
            ", ".join(str(patch.path) for patch in entry.patches()),
        )
        raise

    if result.outcome == FileOutcome.APPLIED and result.error:
        # Rejected hunks only survive in the -ig.patch file
        cache.release(hash)
    else:
        cache.clear(hash)
    return result


def _replay(
    record: DiffFileRecord,
    entry: CacheEntry,
    backend: RepositoryBackend,
    result: FileResult,
) -> None:
    """Revert, apply, stage and restore one file, updating ``result``.

    A recovered file is staged as the full original, rejected hunks
    included.
    """
    backend.revert_file(record.file_name)

    applied = backend.apply_patch(entry.accepted_changes.path)
    if not applied.success:
        logger.warning(
            "Accepted hunks of %s did not apply (patch cache %s, %s): %s",
            record.file_name,
            entry.hash,
            entry.accepted_changes.path,
            applied.stderr,
        )
        restored = backend.apply_patch(entry.original_state.path)
        if not restored.success:
            raise PatchRecoveryError(
                record.file_name, entry.hash, entry.original_state.path, restored.stderr
            )

        backend.stage_file(record.file_name)
        result.outcome = FileOutcome.RECOVERED
        result.error = applied.stderr
        # The ignored patch cannot apply on top of the full original
        return

    backend.stage_file(record.file_name)
    result.outcome = FileOutcome.APPLIED

    if entry.ignored_changes is not None:
        restored = backend.apply_patch(entry.ignored_changes.path)
        if not restored.success:
            logger.warning(
                "Rejected hunks of %s could not be restored to the working tree; "
                "patch cache %s kept at %s: %s",
                record.file_name,
                entry.hash,
                entry.ignored_changes.path,
                restored.stderr,
            )
            result.error = restored.stderr


def select_hunks(
    records: list[DiffFileRecord],
    decide: HunkDecider,
    cache: PatchCache,
    backend: RepositoryBackend,
) -> list[FileResult]:
    """Interactively select hunks file by file and stage the accepted ones.

    Each file is classified and applied before the next file is presented,
    so an interruption leaves earlier files staged and the current file
    untouched.

    Args:
        records: Parsed diff records.
        decide: Callback returning True to accept a hunk.
        cache: Scratch patch cache.
        backend: Repository operations.

    Returns:
        One FileResult per record, in order.
    """
    results: list[FileResult] = []
    for record in records:
        classify_hunks(record, decide)
        results.append(apply_selection(record, cache, backend))
    return results
