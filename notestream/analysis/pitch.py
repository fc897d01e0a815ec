"""Autocorrelation pitch estimation for single sample windows."""

from typing import Tuple

import numpy as np

from ..core import SampleWindow, PitchEstimate, Detected, NoPitch, NoPitchReason
from ..core.constants import RMS_THRESHOLD, TRIM_THRESHOLD, MIN_WINDOW_LENGTH


class PitchEstimator:
    """Estimate the fundamental frequency of one window (ACF2+ method).

    The window is gated on RMS energy, its edges are trimmed back to the
    first quiet sample on each side, and the fundamental period is taken
    as the strongest autocorrelation peak after the zero-lag lobe, refined
    by parabolic interpolation.

    Estimation is a pure function of the window: no state is kept between
    calls, so one estimator can serve any number of streams.
    """

    def __init__(
        self,
        rms_threshold: float = RMS_THRESHOLD,
        trim_threshold: float = TRIM_THRESHOLD,
        min_window_length: int = MIN_WINDOW_LENGTH,
    ):
        """
        Initialize PitchEstimator.

        Args:
            rms_threshold: Minimum RMS energy for a window to be analysed
            trim_threshold: Amplitude under which a sample counts as quiet when trimming
            min_window_length: Shortest trimmed window that is correlated

        Raises:
            ValueError: If a threshold is negative or min_window_length is below 3
        """
        if rms_threshold < 0 or trim_threshold < 0:
            raise ValueError(
                f"Thresholds must be >= 0, got rms={rms_threshold}, trim={trim_threshold}"
            )
        # Parabolic refinement needs a peak with two neighbours
        if min_window_length < 3:
            raise ValueError(f"min_window_length must be >= 3, got {min_window_length}")
        self.rms_threshold = rms_threshold
        self.trim_threshold = trim_threshold
        self.min_window_length = min_window_length

    def estimate(self, window: SampleWindow) -> PitchEstimate:
        """
        Estimate the fundamental frequency of a window.

        Args:
            window: Samples and their sample rate

        Returns:
            Detected(frequency) or NoPitch(reason)
        """
        samples = window.samples

        rms = float(np.sqrt(np.mean(samples**2)))
        if rms < self.rms_threshold:
            return NoPitch(NoPitchReason.SILENCE)

        start, end = self.trim_bounds(samples)
        trimmed = samples[start:end]
        if len(trimmed) < self.min_window_length:
            return NoPitch(NoPitchReason.TOO_SHORT)

        corr = self.autocorrelation(trimmed)
        period = self._find_period(corr)
        if period is None or period <= 0:
            return NoPitch(NoPitchReason.NO_PERIODICITY)

        return Detected(window.sample_rate / period)

    def trim_bounds(self, samples: np.ndarray) -> Tuple[int, int]:
        """
        Find the edges of the sub-window used for correlation.

        The left bound is the first quiet sample within the first half,
        the right bound the last quiet sample within the second half,
        scanning back from the end. A side with no quiet sample falls back
        to index 0 on the left and to the last index on the right.

        Returns:
            Tuple of (start, end) for slicing, end exclusive
        """
        size = len(samples)
        half = (size + 1) // 2
        quiet = np.abs(samples) < self.trim_threshold

        start = 0
        head = np.flatnonzero(quiet[:half])
        if head.size:
            start = int(head[0])

        end = size - 1
        tail_start = size - half + 1
        tail = np.flatnonzero(quiet[tail_start:])
        if tail.size:
            end = tail_start + int(tail[-1])

        return start, end

    @staticmethod
    def autocorrelation(samples: np.ndarray) -> np.ndarray:
        """Unnormalized autocorrelation for lags 0..N-1."""
        n = len(samples)
        return np.correlate(samples, samples, mode="full")[n - 1 :]

    @staticmethod
    def _find_period(corr: np.ndarray):
        """Locate the fundamental lag in an autocorrelation, in samples.

        Returns None when the correlation never stops falling.
        """
        # Skip the zero-lag lobe: first lag where c[d] <= c[d + 1]
        rising = np.flatnonzero(np.diff(corr) >= 0)
        if rising.size == 0:
            return None
        d = int(rising[0])

        peak = d + int(np.argmax(corr[d:]))
        if peak <= 0 or peak >= len(corr) - 1:
            return float(peak)
        return PitchEstimator._interpolate_peak(corr, peak)

    @staticmethod
    def _interpolate_peak(corr: np.ndarray, peak: int) -> float:
        """Parabolic interpolation through the peak and its two neighbours.

        A flat neighbourhood (zero curvature) keeps the integer lag.
        """
        x1, x2, x3 = corr[peak - 1], corr[peak], corr[peak + 1]
        a = (x1 + x3 - 2 * x2) / 2
        b = (x3 - x1) / 2
        if a != 0:
            return float(peak - b / (2 * a))
        return float(peak)
