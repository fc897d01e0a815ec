"""Analysis layer - Per-window signal analysis.

This layer turns raw sample windows into musical quantities:
- Fundamental frequency estimation (autocorrelation)
- Frequency to note quantization
"""

from .pitch import PitchEstimator
from .note_mapper import NoteMapper

__all__ = [
    "PitchEstimator",
    "NoteMapper",
]
