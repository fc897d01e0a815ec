"""Configuration for the note detection pipeline."""

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import (
    RMS_THRESHOLD,
    TRIM_THRESHOLD,
    MIN_WINDOW_LENGTH,
    MIN_NOTE,
    MAX_NOTE,
    COOLDOWN_MS,
    REFERENCE_HZ,
    REFERENCE_NOTE,
    DEFAULT_SR,
    DEFAULT_WINDOW_SIZE,
    DEFAULT_FRAME_RATE,
    DEFAULT_HIGHPASS_HZ,
)


@dataclass
class StreamConfig:
    """Configuration for pitch estimation, note mapping and onset debouncing.

    Attributes:
        rms_threshold: Windows quieter than this RMS yield no pitch (default: 0.01)
        trim_threshold: Amplitude below which edge samples end the trim scan (default: 0.2)
        min_window_length: Shortest trimmed window worth correlating (default: 4)
        min_note: Lowest note number that produces onsets (default: 55, G3)
        max_note: Highest note number that produces onsets (default: 96, C7)
        cooldown_ms: Time before a held note may re-trigger (default: 200)
        reference_hz: Frequency of the reference note (default: 440.0)
        reference_note: Note number of the reference pitch (default: 69)
        sample_rate: Capture sample rate in Hz (default: 44100)
        window_size: Samples per analysis window (default: 2048)
        frame_rate: Windows analysed per second (default: 60)
        hop_length: Samples between windows, derived from frame_rate when None
        highpass_hz: High-pass cutoff applied at capture, None disables (default: 80)
    """

    rms_threshold: float = RMS_THRESHOLD
    trim_threshold: float = TRIM_THRESHOLD
    min_window_length: int = MIN_WINDOW_LENGTH
    min_note: int = MIN_NOTE
    max_note: int = MAX_NOTE
    cooldown_ms: float = COOLDOWN_MS
    reference_hz: float = REFERENCE_HZ
    reference_note: int = REFERENCE_NOTE
    sample_rate: int = DEFAULT_SR
    window_size: int = DEFAULT_WINDOW_SIZE
    frame_rate: float = DEFAULT_FRAME_RATE
    hop_length: Optional[int] = None
    highpass_hz: Optional[float] = DEFAULT_HIGHPASS_HZ

    def __post_init__(self):
        if self.rms_threshold < 0:
            raise ValueError(f"rms_threshold must be >= 0, got {self.rms_threshold}")
        if self.trim_threshold < 0:
            raise ValueError(f"trim_threshold must be >= 0, got {self.trim_threshold}")
        if self.min_window_length < 3:
            raise ValueError(
                f"min_window_length must be >= 3, got {self.min_window_length}"
            )
        if self.min_note > self.max_note:
            raise ValueError(
                f"min_note ({self.min_note}) must not exceed max_note ({self.max_note})"
            )
        if self.cooldown_ms < 0:
            raise ValueError(f"cooldown_ms must be >= 0, got {self.cooldown_ms}")
        if self.reference_hz <= 0:
            raise ValueError(f"reference_hz must be positive, got {self.reference_hz}")
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.window_size < self.min_window_length:
            raise ValueError(
                f"window_size ({self.window_size}) must be at least "
                f"min_window_length ({self.min_window_length})"
            )
        if self.frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {self.frame_rate}")
        if self.hop_length is not None and self.hop_length <= 0:
            raise ValueError(f"hop_length must be positive, got {self.hop_length}")
        if self.highpass_hz is not None and self.highpass_hz < 0:
            raise ValueError(f"highpass_hz must be >= 0, got {self.highpass_hz}")

    def hop_length_for(self, sr: Optional[int] = None) -> int:
        """Samples between consecutive windows at the given sample rate."""
        if self.hop_length is not None:
            return self.hop_length
        sr = sr if sr is not None else self.sample_rate
        return max(1, int(round(sr / self.frame_rate)))

    @property
    def note_range(self) -> range:
        """Note numbers that produce onsets."""
        return range(self.min_note, self.max_note + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StreamConfig":
        """Build a config from a dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: str) -> "StreamConfig":
        """Load a config from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file holds unknown keys or invalid values
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file must hold a JSON object: {path}")

        return cls.from_dict(data)

    def with_overrides(self, **overrides: Any) -> "StreamConfig":
        """Return a copy with the given non-None fields replaced."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return self.from_dict(data)
