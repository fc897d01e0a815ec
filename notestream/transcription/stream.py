"""Note event stream - debounce per-window pitch estimates into onsets.

Per-window estimates arrive far more often than notes change and jitter
between frames. The stream collapses a run of identical detections into a
single onset per held note, while letting a sustained or repeated note
re-trigger once the cooldown has elapsed.
"""

import warnings
from dataclasses import dataclass
from typing import Optional

from ..core import StreamConfig, NoteOnsetEvent, PitchEstimate, Detected
from ..analysis import NoteMapper


@dataclass
class StreamState:
    """The most recently emitted onset. Suppressed detections never land here."""

    last_note_name: Optional[str] = None
    last_emit_time: Optional[float] = None


@dataclass
class StreamStats:
    """Counters over every window the stream has seen."""

    windows: int = 0
    no_pitch: int = 0
    out_of_range: int = 0
    suppressed: int = 0
    emitted: int = 0

    @property
    def detected(self) -> int:
        """Windows that carried a pitch."""
        return self.windows - self.no_pitch


class NoteEventStream:
    """Turn a stream of pitch estimates into discrete note onset events.

    Call process() once per window, in arrival order, with the window's
    logical time in milliseconds. Time is supplied by the caller, never
    read from a clock.
    """

    def __init__(
        self,
        config: Optional[StreamConfig] = None,
        mapper: Optional[NoteMapper] = None,
    ):
        """
        Initialize NoteEventStream.

        Args:
            config: Note range and cooldown settings
            mapper: Frequency to note converter (built from config if omitted)
        """
        self.config = config if config is not None else StreamConfig()
        self.mapper = mapper if mapper is not None else NoteMapper(
            reference_hz=self.config.reference_hz,
            reference_note=self.config.reference_note,
        )
        self.state = StreamState()
        self.stats = StreamStats()
        self._last_time: Optional[float] = None

    def process(
        self, estimate: PitchEstimate, now: float
    ) -> Optional[NoteOnsetEvent]:
        """
        Consume one window's estimate.

        Args:
            estimate: Pitch estimate for the window
            now: Logical time of the window in milliseconds

        Returns:
            An onset event, or None if the window starts no new note
        """
        if self._last_time is not None and now < self._last_time:
            warnings.warn(
                f"Logical time went backwards ({now} ms < {self._last_time} ms)",
                RuntimeWarning,
                stacklevel=2,
            )
        self._last_time = now
        self.stats.windows += 1

        if not isinstance(estimate, Detected):
            self.stats.no_pitch += 1
            return None

        identity = self.mapper.identity(estimate.frequency)
        if not self.config.min_note <= identity.note_number <= self.config.max_note:
            self.stats.out_of_range += 1
            return None

        full_name = identity.full_name
        state = self.state
        is_new_note = full_name != state.last_note_name
        cooled_down = (
            state.last_emit_time is None
            or now - state.last_emit_time > self.config.cooldown_ms
        )
        if not (is_new_note or cooled_down):
            self.stats.suppressed += 1
            return None

        state.last_note_name = full_name
        state.last_emit_time = now
        self.stats.emitted += 1
        return NoteOnsetEvent(identity=identity, time_ms=now)

    def reset(self) -> None:
        """Forget the last onset and clear the counters."""
        self.state = StreamState()
        self.stats = StreamStats()
        self._last_time = None

    def lane_position(self, event: NoteOnsetEvent) -> float:
        """Horizontal display position of an onset, 0.0 at min_note to 1.0 at max_note."""
        span = self.config.max_note - self.config.min_note
        if span == 0:
            return 0.5
        return (event.note_number - self.config.min_note) / span
