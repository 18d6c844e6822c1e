"""CLI commands for global configuration management."""

import typer

from taskgit import global_config

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global taskgit configuration in ~/.taskgit/",
    add_completion=False,
)


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    try:
        config = global_config.get_config()
        patch_dir = global_config.get_patch_dir()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Current taskgit configuration (~/.taskgit/config.yaml):")
    typer.echo()
    typer.echo(f"  Patch directory: {patch_dir}")
    typer.echo(f"  Color: {'on' if config.color else 'off'}")
    typer.echo()
    typer.echo("  Diff defaults:")
    for key, value in config.diff.model_dump().items():
        typer.echo(f"    {key}: {value if value is not None else 'not set'}")


@config_app.command("set-patch-dir")
def config_set_patch_dir(
    path: str = typer.Argument(
        ...,
        help="Directory for scratch patches written during add-diff",
    ),
) -> None:
    """Set where scratch patches are written."""
    try:
        global_config.set_patch_dir(path)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Patch directory set to: {path}")
