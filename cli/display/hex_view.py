"""
Hex dump display utilities.
"""

from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from splicedrum.formats.splice.binary_parser import FieldSpan
from cli.display.formatters import hex_with_ascii

console = Console()

# Style per field kind in the annotated dump
FIELD_STYLES = {
    "header": "bold blue",
    "body_size": "blue",
    "version": "green",
    "tempo": "yellow",
    "id": "magenta",
    "name_length": "cyan",
    "name": "bold cyan",
    "steps": "red",
}


def field_style(name: str) -> str:
    """Pick a display style from the last component of a field name."""
    return FIELD_STYLES.get(name.rsplit(".", 1)[-1], "white")


def byte_styles(fields: List[FieldSpan]) -> Dict[int, str]:
    """Map each byte offset covered by a decoded field to that field's style."""
    styles = {}
    for span in fields:
        style = field_style(span.name)
        for offset in range(span.offset, span.end):
            styles[offset] = style
    return styles


def display_hex_dump(
    data: bytes,
    fields: Optional[List[FieldSpan]] = None,
    title: str = "Hex Dump",
    bytes_per_line: int = 16,
    max_lines: int = 32,
) -> None:
    """
    Display a hex dump with each byte colored by the field it belongs to.

    Bytes outside every decoded field (trailing padding) are dimmed.
    """
    styles = byte_styles(fields or [])
    content = Text()
    end = min(len(data), max_lines * bytes_per_line)

    for line_offset in range(0, end, bytes_per_line):
        chunk = data[line_offset : line_offset + bytes_per_line]
        if line_offset:
            content.append("\n")
        content.append(f"{line_offset:08X}  ", style="dim")

        for i, b in enumerate(chunk):
            if i == 8:
                content.append(" ")
            content.append(f"{b:02X} ", style=styles.get(line_offset + i, "dim"))

        # Pad short final line so the ASCII column lines up
        missing = bytes_per_line - len(chunk)
        content.append("   " * missing + (" " if len(chunk) <= 8 else "") + " ")

        for i, b in enumerate(chunk):
            char = chr(b) if 32 <= b < 127 else "."
            content.append(char, style=styles.get(line_offset + i, "dim"))

    if len(data) > end:
        content.append(f"\n... {len(data) - end} more bytes ...", style="dim")

    console.print(Panel(content, title=escape(title), border_style="blue", expand=False))


def display_field_dump(data: bytes, fields: List[FieldSpan], max_bytes: int = 16) -> None:
    """
    Display each decoded field with its offset and raw bytes.

    Args:
        data: Raw file contents
        fields: Field layout recorded by the parser
        max_bytes: Bytes shown per field before eliding
    """
    table = Table(title="Field Layout", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Offset", style="dim", width=8)
    table.add_column("Size", justify="right", width=6)
    table.add_column("Field", width=18)
    table.add_column("Bytes")

    for span in fields:
        raw = data[span.offset : span.end]
        shown = hex_with_ascii(raw[:max_bytes], offset=span.offset, bytes_per_line=8)
        if len(raw) > max_bytes:
            shown += f"\n... {len(raw) - max_bytes} more bytes"
        style = field_style(span.name)
        table.add_row(
            f"0x{span.offset:04X}",
            str(span.size),
            f"[{style}]{escape(span.name)}[/{style}]",
            escape(shown),
        )

    console.print(table)

    last = fields[-1].end if fields else 0
    if len(data) > last:
        console.print(f"[dim]{len(data) - last} trailing bytes after the declared body (ignored)[/dim]")
