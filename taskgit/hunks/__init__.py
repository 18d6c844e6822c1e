"""Interactive hunk selection for taskgit.

This package provides the hunk-selection engine with:
- models: DiffFileRecord, CachedPatch, CacheEntry, FileOutcome, FileResult
- parser: parse_git_diff_output
- cache: PatchCache, compute_patch_hash, get_default_patch_dir,
         remove_stale_patches
- backend: ApplyResult, RepositoryBackend, GitBackend
- executor: HunkDecider, PatchRecoveryError, classify_hunks,
            apply_selection, select_hunks
"""

# Models
from taskgit.hunks.models import (
    CacheEntry,
    CachedPatch,
    DiffFileRecord,
    FileOutcome,
    FileResult,
)

# Parser
from taskgit.hunks.parser import (
    parse_git_diff_output,
)

# Cache
from taskgit.hunks.cache import (
    PatchCache,
    compute_patch_hash,
    get_default_patch_dir,
    remove_stale_patches,
)

# Backend
from taskgit.hunks.backend import (
    ApplyResult,
    GitBackend,
    RepositoryBackend,
)

# Executor
from taskgit.hunks.executor import (
    HunkDecider,
    PatchRecoveryError,
    apply_selection,
    classify_hunks,
    select_hunks,
)


__all__ = [
    # Models
    "DiffFileRecord",
    "CachedPatch",
    "CacheEntry",
    "FileOutcome",
    "FileResult",
    # Parser
    "parse_git_diff_output",
    # Cache
    "PatchCache",
    "compute_patch_hash",
    "get_default_patch_dir",
    "remove_stale_patches",
    # Backend
    "ApplyResult",
    "RepositoryBackend",
    "GitBackend",
    # Executor
    "HunkDecider",
    "PatchRecoveryError",
    "classify_hunks",
    "apply_selection",
    "select_hunks",
]
