"""Tests for the pattern data models."""

import dataclasses
import struct
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from splicedrum.models.pattern import Pattern, format_tempo
from splicedrum.models.track import Step, Steps, Track

KICK_STEPS = [1, 0, 0, 0] * 4


def float32(value):
    return struct.unpack("<f", struct.pack("<f", value))[0]


class TestSteps:
    """Test cases for the 16 step bar."""

    def test_render_groups_of_four(self):
        steps = Steps([1, 0, 1, 0, 0, 0, 0, 0, 1, 1, 1, 1, 0, 0, 0, 1])

        assert str(steps) == "|x-x-|----|xxxx|---x|"

    def test_empty_bar(self):
        assert str(Steps.empty()) == "|----|----|----|----|"
        assert Steps.empty().triggered == []

    def test_triggered_indices(self):
        assert Steps(KICK_STEPS).triggered == [0, 4, 8, 12]

    def test_from_bytes(self):
        steps = Steps.from_bytes(bytes(KICK_STEPS))

        assert steps[4] is Step.TRIGGERED
        assert len(steps.beats()) == 4

    @pytest.mark.parametrize("count", [0, 15, 17])
    def test_wrong_length_rejected(self, count):
        with pytest.raises(ValueError, match="16 steps"):
            Steps([0] * count)

    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError):
            Steps([2] + [0] * 15)

    def test_step_characters(self):
        assert str(Step.TRIGGERED) == "x"
        assert str(Step.SILENT) == "-"


class TestTrack:
    """Test cases for Track."""

    def test_render(self):
        track = Track(id=1, name="kick", steps=Steps(KICK_STEPS))

        assert str(track) == "(1) kick\t|x---|x---|x---|x---|"

    def test_steps_coerced(self):
        track = Track(id=2, name="snare", steps=KICK_STEPS)

        assert isinstance(track.steps, Steps)
        assert not track.is_silent

    def test_default_steps_silent(self):
        assert Track(id=0, name="").is_silent

    @pytest.mark.parametrize("track_id", [-1, 256])
    def test_id_range(self, track_id):
        with pytest.raises(ValueError, match="0-255"):
            Track(id=track_id, name="x")

    def test_immutable(self):
        track = Track(id=1, name="kick")

        with pytest.raises(dataclasses.FrozenInstanceError):
            track.name = "snare"

    def test_raw_name_ignored_in_equality(self):
        assert Track(id=1, name="a", raw_name=b"a") == Track(id=1, name="a")


class TestPattern:
    """Test cases for Pattern."""

    def test_render(self):
        pattern = Pattern(
            version="0.808-alpha",
            tempo=120.0,
            tracks=[
                Track(id=0, name="kick", steps=KICK_STEPS),
                Track(id=1, name="snare", steps=[0, 0, 0, 0, 1, 0, 0, 0] * 2),
            ],
        )

        assert pattern.render() == (
            "Saved with HW Version: 0.808-alpha\n"
            "Tempo: 120\n"
            "(0) kick\t|x---|x---|x---|x---|\n"
            "(1) snare\t|----|x---|----|x---|\n"
        )
        assert str(pattern) == pattern.render()

    def test_render_without_tracks(self):
        pattern = Pattern(version="0.909", tempo=float32(98.4))

        assert str(pattern) == "Saved with HW Version: 0.909\nTempo: 98.4\n"

    def test_tracks_stored_as_tuple(self):
        pattern = Pattern(version="", tempo=1.0, tracks=[Track(id=1, name="a")])

        assert isinstance(pattern.tracks, tuple)
        assert pattern.track_count == 1

    def test_get_track(self):
        pattern = Pattern(version="", tempo=1.0, tracks=[Track(id=7, name="tom")])

        assert pattern.get_track(7).name == "tom"
        assert pattern.get_track(8) is None

    def test_immutable(self):
        pattern = Pattern(version="", tempo=1.0)

        with pytest.raises(dataclasses.FrozenInstanceError):
            pattern.tempo = 2.0


class TestFormatTempo:
    """Test cases for tempo formatting."""

    @pytest.mark.parametrize(
        "tempo, expected",
        [
            (120.0, "120"),
            (float32(98.4), "98.4"),
            (98.4, "98.4"),
            (float32(118.7), "118.7"),
            (0.5, "0.5"),
            (240.0, "240"),
            (1e7, "1e+07"),
            (0.0, "0"),
            (1234567.0, "1.234567e+06"),
            (123000.0, "123000"),
            (float32(1e-5), "1e-05"),
        ],
    )
    def test_shortest_form(self, tempo, expected):
        assert format_tempo(tempo) == expected

    def test_special_values(self):
        assert format_tempo(float("nan")) == "NaN"
        assert format_tempo(float("inf")) == "+Inf"
        assert format_tempo(float("-inf")) == "-Inf"
