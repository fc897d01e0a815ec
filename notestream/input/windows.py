"""Slice a recording into the windows a live capture would deliver."""

from typing import Iterator, Tuple
import numpy as np

from ..core import SampleWindow


def iter_windows(
    audio: np.ndarray,
    sr: int,
    window_size: int,
    hop_length: int,
) -> Iterator[Tuple[SampleWindow, float]]:
    """
    Yield overlapping windows with their logical timestamps.

    A live analyser hands over its most recent window_size samples at every
    frame, so each window is stamped with the time of its last sample.
    Trailing samples that do not fill a whole window are dropped.

    Args:
        audio: Audio array (mono)
        sr: Sample rate
        window_size: Samples per window
        hop_length: Samples between window starts

    Yields:
        Tuples of (window, time in milliseconds)
    """
    if window_size <= 0 or hop_length <= 0:
        raise ValueError(
            f"window_size and hop_length must be positive, got {window_size}, {hop_length}"
        )

    audio = np.asarray(audio)
    for start in range(0, len(audio) - window_size + 1, hop_length):
        end = start + window_size
        yield SampleWindow(audio[start:end], sr), end * 1000.0 / sr


def count_windows(n_samples: int, window_size: int, hop_length: int) -> int:
    """Number of windows iter_windows yields for n_samples."""
    if n_samples < window_size:
        return 0
    return 1 + (n_samples - window_size) // hop_length
