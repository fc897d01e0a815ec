"""Base classes for transcription."""

from abc import ABC, abstractmethod
from typing import List
import numpy as np

from ..core import NoteOnsetEvent


class Transcriber(ABC):
    """Abstract base class for audio transcription."""

    @abstractmethod
    def transcribe(self, audio: np.ndarray, sr: int) -> List[NoteOnsetEvent]:
        """
        Transcribe audio to note onsets.

        Args:
            audio: Audio array
            sr: Sample rate

        Returns:
            List of onset events in time order
        """
        pass
