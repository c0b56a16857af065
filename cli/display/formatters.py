"""
Display formatting utilities for CLI output.

Provides step grids, density bars and other formatting helpers.
"""

from rich.text import Text

from splicedrum.models.track import Step, Steps


def step_grid(
    steps: Steps,
    on_char: str = "x",
    off_char: str = "-",
    on_style: str = "bold magenta",
    off_style: str = "dim",
) -> Text:
    """
    Create a colored step grid for a bar.

    Returns:
        Text like "|x---|x---|x---|x---|" with triggered steps highlighted
    """
    text = Text("|", style="dim")
    for beat in steps.beats():
        for step in beat:
            if step is Step.TRIGGERED:
                text.append(on_char, style=on_style)
            else:
                text.append(off_char, style=off_style)
        text.append("|", style="dim")
    return text


def density_bar(
    used: int,
    total: int,
    width: int = 16,
    filled_char: str = "█",
    empty_char: str = "░",
) -> str:
    """
    Create a density/usage bar with percentage.

    Returns:
        Formatted string like "[████░░░░░░░░░░░░]  25% (4/16)"
    """
    if total <= 0:
        return f"[{empty_char * width}]   0% (0/0)"

    fill_count = int((used / total) * width)
    bar = filled_char * fill_count + empty_char * (width - fill_count)
    percent = int((used / total) * 100)

    return f"[{bar}] {percent:3d}% ({used}/{total})"


def hex_with_ascii(data: bytes, offset: int = 0, bytes_per_line: int = 16) -> str:
    """
    Format bytes as hex dump with ASCII representation.

    Returns:
        Multi-line string with format: "0x0000: 53 50 4C ...  SPL..."
    """
    lines = []
    for i in range(0, len(data), bytes_per_line):
        chunk = data[i : i + bytes_per_line]
        hex_part = " ".join(f"{b:02X}" for b in chunk)
        ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)

        # Pad hex part for alignment
        hex_padded = f"{hex_part:<{bytes_per_line * 3 - 1}}"

        lines.append(f"0x{offset + i:04X}: {hex_padded}  {ascii_part}")

    return "\n".join(lines)


def format_size(size: int) -> str:
    """
    Format a byte count.

    Returns:
        "1 byte" or "204 bytes"
    """
    return f"{size} byte" if size == 1 else f"{size} bytes"
