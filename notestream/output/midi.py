"""MIDI export functionality."""

import pretty_midi
from typing import List
from pathlib import Path

from ..core import NoteOnsetEvent
from ..core.constants import MIDI_MIN, MIDI_MAX, NOTE_LIFETIME_MS


class MIDIExporter:
    """Export onset events to MIDI format.

    Onsets carry no offset, so each note is held until the next onset or
    for max_duration seconds, whichever comes first.
    """

    def __init__(
        self,
        tempo: float = 120.0,
        instrument_name: str = "Violin",
        instrument_program: int = 40,
        velocity: int = 100,
        max_duration: float = NOTE_LIFETIME_MS / 1000.0,
    ):
        """
        Initialize MIDIExporter.

        Args:
            tempo: Tempo in BPM
            instrument_name: MIDI instrument name
            instrument_program: MIDI program number (0-127)
            velocity: Velocity given to every note (1-127)
            max_duration: Longest a note is held, in seconds
        """
        self.tempo = tempo
        self.instrument_name = instrument_name
        self.instrument_program = instrument_program
        self.velocity = velocity
        self.max_duration = max_duration

    def export(self, events: List[NoteOnsetEvent], output_path: str) -> None:
        """
        Export onset events to MIDI file.

        Args:
            events: Onset events in time order
            output_path: Path to output MIDI file
        """
        midi = self.events_to_pretty_midi(events)

        # Ensure output directory exists
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        midi.write(str(output_path))

    def events_to_pretty_midi(
        self, events: List[NoteOnsetEvent]
    ) -> pretty_midi.PrettyMIDI:
        """Convert onset events to PrettyMIDI object without saving."""
        midi = pretty_midi.PrettyMIDI(initial_tempo=self.tempo)

        instrument = pretty_midi.Instrument(
            program=self.instrument_program,
            name=self.instrument_name,
        )

        for i, event in enumerate(events):
            start = event.time_ms / 1000.0
            end = start + self.max_duration
            if i + 1 < len(events):
                end = min(end, events[i + 1].time_ms / 1000.0)
            if end <= start:
                continue

            instrument.notes.append(
                pretty_midi.Note(
                    velocity=self.velocity,
                    pitch=max(MIDI_MIN, min(MIDI_MAX, event.note_number)),
                    start=start,
                    end=end,
                )
            )

        midi.instruments.append(instrument)
        return midi
