"""
Track data model for SPLICE patterns.

A track is one instrument lane: an identifier, a name and a bar of
16 steps, one per 16th note of a 4/4 measure.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional, Tuple

STEPS_PER_BAR = 16
STEPS_PER_BEAT = 4


class Step(IntEnum):
    """A single step value as stored in the file."""

    SILENT = 0
    TRIGGERED = 1

    def __str__(self) -> str:
        return "x" if self is Step.TRIGGERED else "-"


class Steps(tuple):
    """
    Immutable bar of exactly 16 steps.

    Renders as four beat groups separated by pipes:

        >>> str(Steps.from_bytes(bytes([1, 0, 0, 0] * 4)))
        '|x---|x---|x---|x---|'
    """

    def __new__(cls, values: Iterable = ()):
        steps = tuple(Step(v) for v in values)
        if len(steps) != STEPS_PER_BAR:
            raise ValueError(f"A bar needs {STEPS_PER_BAR} steps, got {len(steps)}")
        return super().__new__(cls, steps)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Steps":
        """Build steps from 16 raw step bytes (0 or 1 each)."""
        return cls(raw)

    @classmethod
    def empty(cls) -> "Steps":
        """A bar with every step silent."""
        return cls([Step.SILENT] * STEPS_PER_BAR)

    @property
    def triggered(self) -> List[int]:
        """Indices of triggered steps."""
        return [i for i, step in enumerate(self) if step is Step.TRIGGERED]

    def beats(self) -> List[Tuple[Step, ...]]:
        """Split the bar into its four beat groups."""
        return [tuple(self[i : i + STEPS_PER_BEAT]) for i in range(0, STEPS_PER_BAR, STEPS_PER_BEAT)]

    def __str__(self) -> str:
        groups = ["".join(str(step) for step in beat) for beat in self.beats()]
        return "|" + "|".join(groups) + "|"

    def __repr__(self) -> str:
        return f"Steps({str(self)!r})"


@dataclass(frozen=True)
class Track:
    """
    A single instrument track.

    Attributes:
        id: Track identifier (0-255, not necessarily unique)
        name: Instrument label, decoded from the file as UTF-8
        steps: The 16 step bar
        raw_name: Name bytes exactly as stored in the file
    """

    id: int
    name: str
    steps: Steps = field(default_factory=Steps.empty)
    raw_name: Optional[bytes] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if not 0 <= self.id <= 0xFF:
            raise ValueError(f"Track id must be 0-255, got {self.id}")
        if not isinstance(self.steps, Steps):
            object.__setattr__(self, "steps", Steps(self.steps))

    @property
    def is_silent(self) -> bool:
        """True when no step is triggered."""
        return not self.steps.triggered

    def __str__(self) -> str:
        return f"({self.id}) {self.name}\t{self.steps}"
