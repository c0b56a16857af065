"""
Validate command - check SPLICE file integrity and structure.
"""

import struct
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from splicedrum.formats.splice.binary_parser import SpliceParser
from splicedrum.formats.splice.reader import try_decode
from splicedrum.models.pattern import Pattern, format_tempo
from cli.commands.common import require_file

console = Console()
app = typer.Typer()


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: str  # "error", "warning", "info"
    area: str
    offset: int
    message: str
    expected: str = ""
    actual: str = ""


@dataclass
class ValidationResult:
    """Result of validating a SPLICE file."""

    filepath: str
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    info: List[ValidationIssue] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)


class SpliceValidator:
    """Validate SPLICE file structure and content."""

    # Tempo outside this range decodes fine but is probably corrupt
    VALID_TEMPO_RANGE = (20.0, 300.0)

    def __init__(self, data: bytes, filepath: str):
        self.data = data
        self.filepath = filepath
        self.issues: List[ValidationIssue] = []
        self.pattern: Optional[Pattern] = None

    def validate(self) -> ValidationResult:
        """Perform full validation and return result."""
        self.issues = []
        self.pattern = None

        if self._validate_header() and self._validate_body_size():
            self._validate_decode()
        if self.pattern is not None:
            self._validate_tempo()
            self._validate_track_ids()

        errors = [i for i in self.issues if i.severity == "error"]
        warnings = [i for i in self.issues if i.severity == "warning"]
        info = [i for i in self.issues if i.severity == "info"]

        return ValidationResult(
            filepath=self.filepath,
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            info=info,
        )

    def _add_issue(
        self,
        severity: str,
        area: str,
        offset: int,
        message: str,
        expected: str = "",
        actual: str = "",
    ) -> None:
        """Add a validation issue."""
        self.issues.append(
            ValidationIssue(
                severity=severity,
                area=area,
                offset=offset,
                message=message,
                expected=expected,
                actual=actual,
            )
        )

    def _validate_header(self) -> bool:
        """Check the SPLICE magic."""
        magic = self.data[: SpliceParser.HEADER_SIZE]
        if magic != SpliceParser.HEADER_MAGIC:
            self._add_issue(
                "error",
                "Header",
                0,
                "Invalid header magic",
                repr(SpliceParser.HEADER_MAGIC),
                repr(magic),
            )
            return False

        self._add_issue("info", "Header", 0, "Header magic is valid")
        return True

    def _validate_body_size(self) -> bool:
        """Compare the declared body size with the bytes actually present."""
        body_offset = SpliceParser.BODY_OFFSET
        if len(self.data) < body_offset:
            self._add_issue(
                "error",
                "Body Size",
                SpliceParser.HEADER_SIZE,
                "File ends inside the body size field",
                f">= {body_offset} bytes",
                f"{len(self.data)} bytes",
            )
            return False

        declared = struct.unpack(
            SpliceParser.BODY_SIZE_FORMAT, self.data[SpliceParser.HEADER_SIZE : body_offset]
        )[0]
        available = len(self.data) - body_offset

        if declared > available:
            self._add_issue(
                "error",
                "Body Size",
                SpliceParser.HEADER_SIZE,
                "Declared body size exceeds file size",
                f"{declared} bytes",
                f"{available} bytes",
            )
        elif declared < available:
            self._add_issue(
                "info",
                "Body Size",
                body_offset + declared,
                f"{available - declared} trailing bytes after body are ignored",
            )
        else:
            self._add_issue("info", "Body Size", SpliceParser.HEADER_SIZE, "Body size matches file")
        return True

    def _validate_decode(self) -> None:
        """Run the full decoder and record its error, if any."""
        result = try_decode(self.data)
        if not result.ok:
            error = result.error
            self._add_issue(
                "error",
                "Decode",
                error.offset or 0,
                str(error),
                error.expected,
                error.actual,
            )
            return

        self.pattern = result.pattern
        self._add_issue(
            "info", "Decode", SpliceParser.BODY_OFFSET, f"Decoded {self.pattern.track_count} tracks"
        )

    def _validate_tempo(self) -> None:
        """Flag tempos no drum machine would store."""
        low, high = self.VALID_TEMPO_RANGE
        tempo = self.pattern.tempo
        if not low <= tempo <= high:
            self._add_issue(
                "warning",
                "Tempo",
                SpliceParser.BODY_OFFSET + SpliceParser.VERSION_SIZE,
                "Tempo out of usual range",
                f"{low:g}-{high:g} BPM",
                f"{format_tempo(tempo)} BPM",
            )

    def _validate_track_ids(self) -> None:
        """Note repeated track ids (allowed by the format)."""
        counts = Counter(track.id for track in self.pattern.tracks)
        for track_id, count in sorted(counts.items()):
            if count > 1:
                self._add_issue(
                    "info",
                    "Track IDs",
                    SpliceParser.BODY_OFFSET,
                    f"Track id {track_id} is used by {count} tracks",
                )


def display_validation(result: ValidationResult, verbose: bool = False) -> None:
    """Display validation result with Rich formatting."""
    if result.valid:
        status = "[bold green]VALID[/bold green]"
        border = "green"
    else:
        status = "[bold red]INVALID[/bold red]"
        border = "red"

    # Summary panel
    console.print(
        Panel(
            f"[bold]File:[/bold] {escape(result.filepath)}\n"
            f"[bold]Status:[/bold] {status}\n\n"
            f"Errors: [red]{len(result.errors)}[/red]  "
            f"Warnings: [yellow]{len(result.warnings)}[/yellow]  "
            f"Info: [blue]{len(result.info)}[/blue]",
            title="[bold]Validation Result[/bold]",
            border_style=border,
        )
    )

    if result.errors or result.warnings:
        table = Table(title="Issues", box=box.ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("Severity", width=10)
        table.add_column("Area", style="cyan", width=12)
        table.add_column("Offset", style="dim", width=8)
        table.add_column("Message", width=48)

        for issue in result.errors:
            table.add_row("[red]ERROR[/red]", issue.area, f"0x{issue.offset:04X}", escape(issue.message))

        for issue in result.warnings:
            table.add_row(
                "[yellow]WARN[/yellow]", issue.area, f"0x{issue.offset:04X}", escape(issue.message)
            )

        console.print(table)

    # Show info items if verbose or no errors/warnings
    if result.info and (verbose or (not result.errors and not result.warnings)):
        info_table = Table(title="Validation Checks", box=box.SIMPLE, show_header=False)
        info_table.add_column("", width=60)

        for issue in result.info:
            info_table.add_row(f"[green]OK[/green] {issue.area}: {escape(issue.message)}")

        console.print(info_table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="SPLICE file to validate"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show all validation details"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat warnings as errors"),
) -> None:
    """
    Validate a SPLICE pattern file structure and content.

    Checks for:

    - Valid header magic
    - Declared body size against the file size
    - A clean decode of version, tempo and every track
    - Tempo sanity and repeated track ids

    Examples:

        splicedrum validate pattern_1.splice

        splicedrum validate pattern_1.splice --strict
    """
    require_file(file)

    try:
        data = file.read_bytes()
    except OSError as exc:
        console.print(f"[red]Error: Cannot read {escape(str(file))}: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    validator = SpliceValidator(data, str(file))
    result = validator.validate()

    # In strict mode, treat warnings as errors
    if strict and result.warnings:
        result.valid = False

    display_validation(result, verbose=verbose)

    if not result.valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
