"""
Rich table displays for pattern information.

Provides formatted output for decoded SPLICE patterns.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from splicedrum.models.pattern import Pattern, format_tempo
from splicedrum.models.track import STEPS_PER_BAR, Track
from cli.display.formatters import density_bar, format_size, step_grid

console = Console()


def display_pattern_info(pattern: Pattern, filepath: str, file_info: Optional[dict] = None) -> None:
    """Display decoded pattern information with Rich formatting."""
    header_content = f"""[bold]File:[/bold] {escape(filepath)}
[bold]HW Version:[/bold] {escape(pattern.version) or "N/A"}
[bold]Tempo:[/bold] {format_tempo(pattern.tempo)} BPM
[bold]Tracks:[/bold] {pattern.track_count}"""

    if file_info:
        header_content += f"\n[bold]File Size:[/bold] {format_size(file_info['size'])}"
        if file_info.get("declared_size") is not None:
            header_content += f"\n[bold]Body Size:[/bold] {format_size(file_info['declared_size'])}"
        if file_info.get("trailing_bytes"):
            header_content += (
                f"\n[bold]Trailing:[/bold] {format_size(file_info['trailing_bytes'])} (ignored)"
            )

    console.print(
        Panel(
            header_content,
            title="[bold blue]SPLICE Pattern Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    display_tracks_table(pattern.tracks)


def display_tracks_table(tracks, title: str = "Tracks") -> None:
    """Display tracks as a table of step grids."""
    table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold green")
    table.add_column("ID", style="dim", justify="right", width=4)
    table.add_column("Name", style="cyan", width=12)
    table.add_column("Steps", width=21)
    table.add_column("Density", width=23)

    for track in tracks:
        table.add_row(*track_row(track))

    if not tracks:
        table.add_row("", "[dim]no tracks[/dim]", "", "")

    console.print(table)


def track_row(track: Track) -> tuple:
    """Build the table cells for one track."""
    hits = len(track.steps.triggered)
    return (
        str(track.id),
        escape(track.name),
        step_grid(track.steps),
        density_bar(hits, STEPS_PER_BAR, width=8),
    )
