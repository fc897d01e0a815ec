"""Output layer - Export onset events.

This layer handles exporting detected onsets to:
- MIDI files
- JSON (for scripting and presentation hosts)
"""

from .midi import MIDIExporter
from .events import events_to_dicts, export_events_json

__all__ = [
    "MIDIExporter",
    "events_to_dicts",
    "export_events_json",
]
