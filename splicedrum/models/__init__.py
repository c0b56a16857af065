"""Data models for decoded SPLICE patterns."""

from splicedrum.models.pattern import Pattern, format_tempo
from splicedrum.models.track import STEPS_PER_BAR, Step, Steps, Track

__all__ = [
    "Pattern",
    "Track",
    "Step",
    "Steps",
    "STEPS_PER_BAR",
    "format_tempo",
]
