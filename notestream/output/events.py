"""JSON export of onset events."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core import NoteOnsetEvent, StreamConfig


def events_to_dicts(events: List[NoteOnsetEvent]) -> List[Dict[str, Any]]:
    """Convert events to JSON-serializable dictionaries."""
    return [event.to_dict() for event in events]


def export_events_json(
    events: List[NoteOnsetEvent],
    output_path: str,
    config: Optional[StreamConfig] = None,
) -> None:
    """
    Write onset events (and the config that produced them) to a JSON file.

    Args:
        events: Onset events in time order
        output_path: Path to output JSON file
        config: Pipeline configuration to record alongside the events
    """
    data: Dict[str, Any] = {"events": events_to_dicts(events)}
    if config is not None:
        data["config"] = config.to_dict()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
