"""Core types and constants for Note Stream."""

from .note import NoteIdentity, NoteOnsetEvent
from .estimate import PitchEstimate, Detected, NoPitch, NoPitchReason
from .window import SampleWindow
from .config import StreamConfig
from .constants import (
    PITCH_NAMES,
    DEFAULT_SR,
    DEFAULT_WINDOW_SIZE,
    MIN_NOTE,
    MAX_NOTE,
)

__all__ = [
    "NoteIdentity",
    "NoteOnsetEvent",
    "PitchEstimate",
    "Detected",
    "NoPitch",
    "NoPitchReason",
    "SampleWindow",
    "StreamConfig",
    "PITCH_NAMES",
    "DEFAULT_SR",
    "DEFAULT_WINDOW_SIZE",
    "MIN_NOTE",
    "MAX_NOTE",
]
