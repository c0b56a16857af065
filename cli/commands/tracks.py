"""
Tracks command - per track step grid display.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from cli.commands.common import load_pattern
from cli.display.tables import display_tracks_table

console = Console()
app = typer.Typer()


@app.command()
def tracks(
    file: Path = typer.Argument(..., help="SPLICE file to analyze"),
    track: Optional[int] = typer.Option(None, "--track", "-t", help="Only show tracks with this id"),
) -> None:
    """
    Display the step grid of each track.

    Examples:

        splicedrum tracks pattern_1.splice

        splicedrum tracks pattern_1.splice --track 1
    """
    pattern, _ = load_pattern(file)

    selected = pattern.tracks
    if track is not None:
        selected = tuple(t for t in pattern.tracks if t.id == track)
        if not selected:
            ids = ", ".join(str(t.id) for t in pattern.tracks) or "none"
            console.print(f"[red]Invalid track id: {track}. Available: {ids}[/red]")
            raise typer.Exit(1)

    console.print(
        Panel(
            f"[bold]File:[/bold] {escape(str(file))}\n[bold]HW Version:[/bold] {escape(pattern.version)}",
            title="[bold]Track Information[/bold]",
            border_style="blue",
        )
    )
    display_tracks_table(selected)


if __name__ == "__main__":
    app()
