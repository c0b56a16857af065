"""
Info command - display decoded pattern information.
"""

from pathlib import Path

import typer
from rich.console import Console

from splicedrum.formats.splice.reader import SpliceReader
from cli.commands.common import load_pattern
from cli.display.tables import display_pattern_info

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="SPLICE file to analyze"),
    raw: bool = typer.Option(False, "--raw", "-r", help="Print the plain text rendering only"),
) -> None:
    """
    Display pattern information.

    Shows the hardware version, tempo and a step grid for every track.

    Examples:

        splicedrum info pattern_1.splice

        splicedrum info pattern_1.splice --raw
    """
    pattern, _ = load_pattern(file)

    if raw:
        # Plain output, no markup or highlighting
        typer.echo(pattern.render(), nl=False)
        return

    display_pattern_info(pattern, str(file), SpliceReader.get_file_info(file))


if __name__ == "__main__":
    app()
