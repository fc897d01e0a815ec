"""Transcription layer - Note onsets from a stream of windows.

This layer converts per-window pitch estimates into discrete events:
- Onset debouncing with cooldown (NoteEventStream)
- End-to-end window pipeline (OnsetTranscriber)
"""

from .base import Transcriber
from .stream import NoteEventStream, StreamState, StreamStats
from .onset import OnsetTranscriber

__all__ = [
    "Transcriber",
    "NoteEventStream",
    "StreamState",
    "StreamStats",
    "OnsetTranscriber",
]
