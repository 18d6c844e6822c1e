"""CLI command for removing leftover scratch patches."""

import typer

from taskgit.global_config import GlobalConfigError, get_patch_dir
from taskgit.hunks import remove_stale_patches


def clean_command() -> None:
    """Delete scratch patches left behind by interrupted add-diff runs.

    Check that nothing in them is still needed first: a patch kept after a
    failed restore may be the only copy of those changes.
    """
    try:
        patch_dir = get_patch_dir()
        removed = remove_stale_patches(patch_dir)
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except OSError as e:
        typer.echo(f"Error: could not remove scratch patches: {e}", err=True)
        raise typer.Exit(1)

    if removed:
        typer.echo(f"Removed {removed} scratch patch file(s) from {patch_dir}")
    else:
        typer.echo(f"No scratch patches found in {patch_dir}")
