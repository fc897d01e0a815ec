"""Input layer - Audio loading and windowing."""

from .loader import AudioLoader
from .windows import iter_windows, count_windows

__all__ = [
    "AudioLoader",
    "iter_windows",
    "count_windows",
]
