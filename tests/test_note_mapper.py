"""Tests for frequency to note conversion."""

import math

import numpy as np
import pytest

from notestream.analysis import NoteMapper
from notestream.core import NoteIdentity, PITCH_NAMES


@pytest.fixture
def mapper():
    return NoteMapper()


class TestNoteNumber:
    """Tests for frequency <-> note number conversion."""

    def test_reference_pitch(self, mapper):
        assert mapper.note_number_from_frequency(440.0) == 69

    def test_known_notes(self, mapper):
        assert mapper.note_number_from_frequency(261.63) == 60  # C4
        assert mapper.note_number_from_frequency(880.0) == 81  # A5
        assert mapper.note_number_from_frequency(493.88) == 71  # B4
        assert mapper.note_number_from_frequency(196.0) == 55  # G3

    def test_frequency_from_note_number(self, mapper):
        assert mapper.frequency_from_note_number(69) == 440.0
        assert mapper.frequency_from_note_number(81) == 880.0
        assert abs(mapper.frequency_from_note_number(60) - 261.63) < 0.01

    def test_rounds_to_nearest_note(self, mapper):
        # 40 cents sharp of A4 stays A4, 60 cents sharp becomes A#4
        assert mapper.note_number_from_frequency(440.0 * 2 ** (40 / 1200)) == 69
        assert mapper.note_number_from_frequency(440.0 * 2 ** (60 / 1200)) == 70
        assert mapper.note_number_from_frequency(440.0 * 2 ** (-60 / 1200)) == 68

    def test_round_trip_within_half_semitone(self, mapper):
        half_semitone = 2 ** (0.5 / 12)
        for f in np.geomspace(20.0, 8000.0, 200):
            n = mapper.note_number_from_frequency(f)
            quantized = mapper.frequency_from_note_number(n)
            ratio = max(f, quantized) / min(f, quantized)
            assert ratio <= half_semitone * (1 + 1e-9), f"{f} Hz -> {n} -> {quantized} Hz"

    def test_custom_reference(self):
        mapper = NoteMapper(reference_hz=442.0)
        assert mapper.note_number_from_frequency(442.0) == 69
        assert mapper.frequency_from_note_number(69) == 442.0

    def test_invalid_reference(self):
        with pytest.raises(ValueError):
            NoteMapper(reference_hz=0.0)

    @pytest.mark.parametrize("frequency", [0.0, -440.0, math.inf, math.nan])
    def test_rejects_invalid_frequency(self, mapper, frequency):
        with pytest.raises(ValueError):
            mapper.note_number_from_frequency(frequency)


class TestCentsOffset:
    """Tests for cents deviation."""

    def test_exact_note_has_zero_cents(self, mapper):
        for n in range(-24, 140):
            assert mapper.cents_offset(mapper.frequency_from_note_number(n), n) == 0

    def test_sharp_and_flat(self, mapper):
        assert mapper.cents_offset(440.0 * 2 ** (25.5 / 1200), 69) == 25
        assert mapper.cents_offset(440.0 * 2 ** (-25.5 / 1200), 69) == -26

    def test_floors_toward_negative_infinity(self, mapper):
        # B4 is 493.883 Hz, so 493.88 Hz is a hair flat
        assert mapper.cents_offset(493.88, 71) == -1


class TestIdentity:
    """Tests for full note identity."""

    def test_a4(self, mapper):
        identity = mapper.identity(440.0)
        assert identity == NoteIdentity(note_number=69, name="A", octave=4, cents_offset=0)
        assert identity.full_name == "A4"

    def test_middle_c(self, mapper):
        identity = mapper.identity(261.63)
        assert identity.name == "C"
        assert identity.octave == 4
        assert identity.note_number == 60

    def test_sharps(self, mapper):
        assert mapper.identity(277.18).full_name == "C#4"
        assert mapper.identity(466.16).full_name == "A#4"

    def test_octave_boundary(self, mapper):
        assert mapper.identity(mapper.frequency_from_note_number(59)).full_name == "B3"
        assert mapper.identity(mapper.frequency_from_note_number(60)).full_name == "C4"

    def test_negative_note_numbers(self, mapper):
        identity = mapper.identity(1.0)
        assert identity.note_number == -36
        assert identity.name == "C"
        assert identity.octave == -4

    def test_names_always_in_range(self, mapper):
        for f in np.geomspace(0.5, 20000.0, 300):
            identity = mapper.identity(f)
            assert identity.name in PITCH_NAMES
            assert identity.name == PITCH_NAMES[identity.pitch_class]

    def test_hue_per_pitch_class(self, mapper):
        assert mapper.identity(261.63).hue == 0
        assert mapper.identity(440.0).hue == 270

    def test_identity_is_pure(self, mapper):
        f = 329.1
        assert mapper.identity(f) == mapper.identity(f)
        assert NoteMapper().identity(f) == mapper.identity(f)
