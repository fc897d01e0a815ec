"""Note Stream - Live monophonic pitch to note-onset detection.

Architecture Layers:
    1. core/          - Types (windows, estimates, notes, events) and config
    2. input/         - Audio loading, capture filtering and windowing
    3. analysis/      - Pitch estimation and note quantization
    4. transcription/ - Onset debouncing and the window pipeline
    5. output/        - Export (MIDI, JSON)
"""

__version__ = "0.1.0"

# Core types
from .core import (
    SampleWindow,
    PitchEstimate,
    Detected,
    NoPitch,
    NoPitchReason,
    NoteIdentity,
    NoteOnsetEvent,
    StreamConfig,
)

# Input layer
from .input import AudioLoader, iter_windows

# Analysis layer
from .analysis import PitchEstimator, NoteMapper

# Transcription layer
from .transcription import NoteEventStream, OnsetTranscriber

# Output layer
from .output import MIDIExporter, export_events_json

__all__ = [
    # Core
    "SampleWindow",
    "PitchEstimate",
    "Detected",
    "NoPitch",
    "NoPitchReason",
    "NoteIdentity",
    "NoteOnsetEvent",
    "StreamConfig",
    # Input
    "AudioLoader",
    "iter_windows",
    # Analysis
    "PitchEstimator",
    "NoteMapper",
    # Transcription
    "NoteEventStream",
    "OnsetTranscriber",
    # Output
    "MIDIExporter",
    "export_events_json",
]
