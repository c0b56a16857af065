"""
Dump command - annotated hex dump of a SPLICE file.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.commands.common import load_pattern
from cli.display.hex_view import display_field_dump, display_hex_dump

console = Console()
app = typer.Typer()


@app.command()
def dump(
    file: Path = typer.Argument(..., help="SPLICE file to dump"),
    hex_only: bool = typer.Option(False, "--hex", help="Plain hex dump without field annotation"),
    structure: bool = typer.Option(False, "--structure", "-s", help="Print the field layout as text"),
    max_lines: int = typer.Option(32, "--lines", "-n", help="Maximum lines for the plain hex dump"),
) -> None:
    """
    Show the raw bytes of each decoded field.

    Examples:

        splicedrum dump pattern_1.splice

        splicedrum dump pattern_1.splice --structure

        splicedrum dump pattern_1.splice --hex
    """
    pattern, parser = load_pattern(file)

    if structure:
        typer.echo(parser.dump_structure())
        return

    data = file.read_bytes()

    if hex_only:
        display_hex_dump(data, parser.fields, title=str(file), max_lines=max_lines)
        return

    console.print(
        f"[bold]Body size:[/bold] {parser.declared_size} bytes  "
        f"[bold]Tracks:[/bold] {pattern.track_count}"
    )
    display_field_dump(data, parser.fields)


if __name__ == "__main__":
    app()
