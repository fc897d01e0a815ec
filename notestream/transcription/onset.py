"""Window-by-window onset transcription: estimate, map, debounce."""

from typing import List, Optional
import numpy as np

from .base import Transcriber
from .stream import NoteEventStream
from ..core import StreamConfig, SampleWindow, NoteOnsetEvent, PitchEstimate
from ..analysis import PitchEstimator, NoteMapper
from ..input.windows import iter_windows


class OnsetTranscriber(Transcriber):
    """Run the full pitch -> note -> onset pipeline over sample windows.

    Hosts that capture live audio call process_window() once per captured
    window. transcribe() does the same over a whole recording, slicing it
    the way a live capture would see it.
    """

    def __init__(self, config: Optional[StreamConfig] = None):
        """
        Initialize OnsetTranscriber.

        Args:
            config: Pipeline configuration (defaults if omitted)
        """
        self.config = config if config is not None else StreamConfig()
        self.estimator = PitchEstimator(
            rms_threshold=self.config.rms_threshold,
            trim_threshold=self.config.trim_threshold,
            min_window_length=self.config.min_window_length,
        )
        self.mapper = NoteMapper(
            reference_hz=self.config.reference_hz,
            reference_note=self.config.reference_note,
        )
        self.stream = NoteEventStream(config=self.config, mapper=self.mapper)
        self.last_estimate: Optional[PitchEstimate] = None

    def process_window(
        self, window: SampleWindow, now: float
    ) -> Optional[NoteOnsetEvent]:
        """
        Process one captured window.

        Args:
            window: The latest samples
            now: Logical time of the window in milliseconds

        Returns:
            An onset event, or None
        """
        self.last_estimate = self.estimator.estimate(window)
        return self.stream.process(self.last_estimate, now)

    def transcribe(self, audio: np.ndarray, sr: int) -> List[NoteOnsetEvent]:
        """
        Transcribe a whole recording to onset events.

        The stream is reset first, so each call starts from silence.

        Args:
            audio: Audio array (mono)
            sr: Sample rate

        Returns:
            Onset events in time order
        """
        self.stream.reset()
        events = []

        for window, now in iter_windows(
            audio,
            sr,
            window_size=self.config.window_size,
            hop_length=self.config.hop_length_for(sr),
        ):
            event = self.process_window(window, now)
            if event is not None:
                events.append(event)

        return events
