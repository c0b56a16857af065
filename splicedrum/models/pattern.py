"""
Pattern data model - the top-level result of decoding a SPLICE file.
"""

import math
import struct
from dataclasses import dataclass, field
from typing import Optional, Tuple

from splicedrum.models.track import Track


def _as_float32(value: float) -> float:
    """Round a Python float to the nearest 32-bit float."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def format_tempo(tempo: float) -> str:
    """
    Format a tempo using the shortest text that survives a float32 round trip.

    Whole numbers print without a fractional part, so 120.0 becomes "120"
    and the float32 nearest 98.4 becomes "98.4".

    Args:
        tempo: Tempo in BPM

    Returns:
        Formatted tempo string
    """
    if math.isnan(tempo):
        return "NaN"
    if math.isinf(tempo):
        return "+Inf" if tempo > 0 else "-Inf"

    try:
        target = _as_float32(tempo)
    except OverflowError:
        return f"{tempo:g}"

    digits = 9
    for candidate_digits in range(1, 10):
        if _as_float32(float(f"{target:.{candidate_digits}g}")) == target:
            digits = candidate_digits
            break

    value = float(f"{target:.{digits}g}")
    exponent = math.floor(math.log10(abs(value))) if value else 0
    if exponent < -4 or exponent >= 6:
        return f"{value:.{digits - 1}e}"

    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


@dataclass(frozen=True)
class Pattern:
    """
    Decoded drum pattern.

    Attributes:
        version: Hardware version string the pattern was saved with
        tempo: Tempo in BPM (a 32-bit float in the file)
        tracks: Tracks in file order
    """

    version: str
    tempo: float
    tracks: Tuple[Track, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable of tracks but always store a tuple
        object.__setattr__(self, "tracks", tuple(self.tracks))

    @property
    def track_count(self) -> int:
        return len(self.tracks)

    def get_track(self, track_id: int) -> Optional[Track]:
        """Return the first track with the given id, if any."""
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    def render(self) -> str:
        """
        Render the pattern as plain text.

        Returns:
            Version line, tempo line, then one line per track
        """
        lines = [
            f"Saved with HW Version: {self.version}",
            f"Tempo: {format_tempo(self.tempo)}",
        ]
        lines.extend(str(track) for track in self.tracks)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()
