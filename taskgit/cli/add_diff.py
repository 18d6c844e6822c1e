"""CLI command for interactively staging individual hunks."""

from typing import Optional

import typer
from pydantic import ValidationError

from taskgit.git import DiffOptions, GitError, NoDiffError, get_diff, get_repo_root
from taskgit.global_config import GlobalConfigError, get_config, get_patch_dir
from taskgit.hunks import (
    FileOutcome,
    GitBackend,
    PatchCache,
    PatchRecoveryError,
    parse_git_diff_output,
    select_hunks,
)
from taskgit.cli.utils import configure_logging, format_result, make_prompt_decider


def add_diff_command(
    file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="Only select hunks from this path",
    ),
    branch1: Optional[str] = typer.Option(
        None,
        "--branch1",
        help="Compare this branch (with --branch2)",
    ),
    branch2: Optional[str] = typer.Option(
        None,
        "--branch2",
        help="Compare against this branch (with --branch1)",
    ),
    commit1: Optional[str] = typer.Option(
        None,
        "--commit1",
        help="Compare this commit (with --commit2)",
    ),
    commit2: Optional[str] = typer.Option(
        None,
        "--commit2",
        help="Compare against this commit (with --commit1)",
    ),
    ignore_all_space: bool = typer.Option(
        False,
        "--ignore-all-space",
        "-w",
        help="Ignore whitespace when comparing lines",
    ),
    ignore_blank_lines: bool = typer.Option(
        False,
        "--ignore-blank-lines",
        help="Ignore changes whose lines are all blank",
    ),
    ignore_space_at_eol: bool = typer.Option(
        False,
        "--ignore-space-at-eol",
        help="Ignore changes in whitespace at end of line",
    ),
    ignore_space_change: bool = typer.Option(
        False,
        "--ignore-space-change",
        "-b",
        help="Ignore changes in amount of whitespace",
    ),
    algorithm: Optional[str] = typer.Option(
        None,
        "--algorithm",
        help="Diff algorithm (minimal, patience, histogram)",
    ),
    unified: Optional[int] = typer.Option(
        None,
        "--unified",
        "-U",
        help="Lines of context around each change (fewer lines give smaller hunks)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Show hunks without ANSI colors",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log git commands and scratch patch activity",
    ),
) -> None:
    """Review unstaged changes hunk by hunk and stage the ones you accept.

    Rejected hunks stay in the working tree as unstaged changes. If the
    accepted hunks of a file cannot be applied, the file is restored to
    its original state and staged with every hunk.
    """
    configure_logging(debug)

    try:
        config = get_config()
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    defaults = config.diff
    try:
        options = DiffOptions(
            file=file,
            branch1=branch1,
            branch2=branch2,
            commit1=commit1,
            commit2=commit2,
            ignore_all_space=ignore_all_space or defaults.ignore_all_space,
            ignore_blank_lines=ignore_blank_lines or defaults.ignore_blank_lines,
            ignore_space_at_eol=ignore_space_at_eol or defaults.ignore_space_at_eol,
            ignore_space_change=ignore_space_change or defaults.ignore_space_change,
            algorithm=algorithm.lower() if algorithm else defaults.algorithm,
            unified=unified if unified is not None else defaults.unified,
        )
    except ValidationError as e:
        typer.echo(f"Invalid diff options: {e}", err=True)
        raise typer.Exit(1)

    try:
        repo_root = get_repo_root()
        records = parse_git_diff_output(get_diff(options))
        if not records:
            target = f"'{file}'" if file else "the working tree"
            raise NoDiffError(f"No diff found for {target}.")

        cache = PatchCache(get_patch_dir())
        try:
            results = select_hunks(
                records,
                make_prompt_decider(color=config.color and not no_color),
                cache,
                GitBackend(repo_root),
            )
        finally:
            cache.clear_all()

    except PatchRecoveryError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except (GitError, GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except OSError as e:
        typer.echo(f"Error: could not write scratch patches: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("")
    typer.echo("Summary:")
    for result in results:
        typer.echo(format_result(result))

    recovered = [r for r in results if r.outcome == FileOutcome.RECOVERED]
    if recovered:
        typer.echo("", err=True)
        typer.echo(
            f"{len(recovered)} file(s) could not be partially staged and were staged in full.",
            err=True,
        )
        raise typer.Exit(1)
