"""Frequency <-> note conversions in twelve-tone equal temperament."""

import math

from ..core import NoteIdentity, PITCH_NAMES
from ..core.constants import (
    REFERENCE_HZ,
    REFERENCE_NOTE,
    SEMITONES_PER_OCTAVE,
    CENTS_PER_OCTAVE,
)


class NoteMapper:
    """Quantize frequencies to note numbers, names, octaves and cents.

    Note numbers follow piano-key / MIDI numbering: the reference note
    (69 by default) sounds at the reference frequency (440 Hz by default).
    All methods are pure.
    """

    def __init__(
        self,
        reference_hz: float = REFERENCE_HZ,
        reference_note: int = REFERENCE_NOTE,
    ):
        """
        Initialize NoteMapper.

        Args:
            reference_hz: Frequency of the reference note in Hz
            reference_note: Note number of the reference note
        """
        if reference_hz <= 0:
            raise ValueError(f"reference_hz must be positive, got {reference_hz}")
        self.reference_hz = float(reference_hz)
        self.reference_note = int(reference_note)

    def note_number_from_frequency(self, frequency: float) -> int:
        """Convert frequency (Hz) to the nearest note number.

        Halfway cases round up, so 12 * log2 ratios of x.5 go to x + 1.
        """
        semitones = SEMITONES_PER_OCTAVE * math.log2(
            self._check(frequency) / self.reference_hz
        )
        return int(math.floor(semitones + 0.5)) + self.reference_note

    def frequency_from_note_number(self, note_number: int) -> float:
        """Convert note number to its exact frequency (Hz)."""
        return self.reference_hz * 2 ** (
            (note_number - self.reference_note) / SEMITONES_PER_OCTAVE
        )

    def cents_offset(self, frequency: float, note_number: int) -> int:
        """Signed cents between a frequency and a note, floored."""
        ratio = self._check(frequency) / self.frequency_from_note_number(note_number)
        return int(math.floor(CENTS_PER_OCTAVE * math.log2(ratio)))

    def identity(self, frequency: float) -> NoteIdentity:
        """Map a frequency to its NoteIdentity."""
        note_number = self.note_number_from_frequency(frequency)
        # Floor division and modulo keep negative note numbers in range
        return NoteIdentity(
            note_number=note_number,
            name=PITCH_NAMES[note_number % SEMITONES_PER_OCTAVE],
            octave=note_number // SEMITONES_PER_OCTAVE - 1,
            cents_offset=self.cents_offset(frequency, note_number),
        )

    @staticmethod
    def _check(frequency: float) -> float:
        if not frequency > 0 or math.isinf(frequency):
            raise ValueError(f"Frequency must be positive and finite, got {frequency}")
        return float(frequency)
