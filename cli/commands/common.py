"""
Shared helpers for CLI commands.
"""

from pathlib import Path
from typing import Tuple

import typer
from rich.console import Console
from rich.markup import escape

from splicedrum.errors import SpliceDecodeError
from splicedrum.formats.splice.binary_parser import SpliceParser
from splicedrum.models.pattern import Pattern

console = Console()


def require_file(file: Path) -> None:
    """Exit with an error message when ``file`` does not exist."""
    if not file.exists():
        console.print(f"[red]Error: File not found: {escape(str(file))}[/red]")
        raise typer.Exit(1)


def load_pattern(file: Path) -> Tuple[Pattern, SpliceParser]:
    """
    Decode ``file`` for display, exiting on any decode error.

    Returns:
        Tuple of (pattern, parser) so callers can inspect the field layout
    """
    require_file(file)

    parser = SpliceParser()
    try:
        pattern = parser.parse_file(str(file))
    except SpliceDecodeError as exc:
        console.print(f"[red]Error: Cannot decode {escape(str(file))}: {escape(str(exc))}[/red]")
        raise typer.Exit(1)
    except OSError as exc:
        console.print(f"[red]Error: Cannot read {escape(str(file))}: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    return pattern, parser
