"""Note identity and onset event types."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class NoteIdentity:
    """A frequency quantized to the nearest equal-tempered note."""

    note_number: int  # 69 = A4
    name: str  # Pitch class label, e.g. 'C#'
    octave: int
    cents_offset: int  # Signed deviation from the exact note frequency

    @property
    def full_name(self) -> str:
        """Get note name with octave (e.g., 'A4', 'C#3')."""
        return f"{self.name}{self.octave}"

    @property
    def pitch_class(self) -> int:
        """Get pitch class (0-11, where 0=C)."""
        return self.note_number % 12

    @property
    def hue(self) -> int:
        """Display hue in degrees, one colour per pitch class."""
        return self.pitch_class * 30


@dataclass(frozen=True)
class NoteOnsetEvent:
    """A new note has begun sounding."""

    identity: NoteIdentity
    time_ms: float  # Logical time the onset was emitted at

    @property
    def note_number(self) -> int:
        return self.identity.note_number

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def octave(self) -> int:
        return self.identity.octave

    @property
    def cents_offset(self) -> int:
        return self.identity.cents_offset

    @property
    def full_name(self) -> str:
        return self.identity.full_name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "note": self.full_name,
            "name": self.name,
            "octave": self.octave,
            "note_number": self.note_number,
            "cents_offset": self.cents_offset,
            "time_ms": self.time_ms,
        }
