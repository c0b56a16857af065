"""
splicedrum - Decoder for SPLICE drum machine pattern files.

A command line tool for inspecting decoded drum patterns.
"""

import typer
from rich.console import Console

from splicedrum import __version__
from splicedrum.utils.logging_setup import configure_logging
from cli.commands.info import info
from cli.commands.tracks import tracks
from cli.commands.validate import validate
from cli.commands.dump import dump

console = Console()

# Main app
app = typer.Typer(
    name="splicedrum",
    help="Decode and inspect SPLICE drum machine pattern files.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="info")(info)
app.command(name="tracks")(tracks)
app.command(name="validate")(validate)
app.command(name="dump")(dump)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]splicedrum[/bold] version {__version__}")
    console.print("[dim]Decoder for SPLICE drum machine pattern files[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    splicedrum - Decode and inspect SPLICE drum patterns.

    [bold]Quick Start:[/bold]

        splicedrum info pattern_1.splice         # Version, tempo and tracks
        splicedrum info pattern_1.splice --raw   # Plain text rendering

    [bold]Analysis Commands:[/bold]

        splicedrum tracks pattern_1.splice       # Step grid per track
        splicedrum dump pattern_1.splice         # Annotated field dump

    [bold]Utility Commands:[/bold]

        splicedrum validate pattern_1.splice     # Validate file structure

    Log level defaults to WARNING and can be set with LOG_LEVEL.
    """
    configure_logging(level_override="DEBUG" if verbose else None)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
