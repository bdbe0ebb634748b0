"""paramspace CLI entry point.

Provides commands for describing, sampling and validating parameter sets.
"""

import logging
import sys

import typer

from ..config import load_settings
from .commands import check_command, describe_command, grid_command, sample_command

# Create the main app
app = typer.Typer(
    name="pspace",
    help="Describe, sample and validate parameter spaces",
    invoke_without_command=True,
)

app.command("describe")(describe_command)
app.command("grid")(grid_command)
app.command("sample")(sample_command)
app.command("check")(check_command)


@app.command("version")
def version():
    """Show version information."""
    from .. import __version__
    typer.echo(f"paramspace version {__version__}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """Describe, sample and validate parameter spaces."""
    try:
        level = logging.INFO if verbose else load_settings().log_level
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    logging.basicConfig(level=level)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        typer.echo("\nError: Missing command.", err=True)
        raise typer.Exit(1)


def cli_main():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\nAborted", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
