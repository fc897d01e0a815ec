"""Audio loading and capture-chain preprocessing."""

import warnings
import numpy as np
import librosa
from pathlib import Path
from scipy import signal
from typing import Tuple, Optional

from ..core.constants import (
    DEFAULT_SR,
    DEFAULT_WINDOW_SIZE,
    DEFAULT_HIGHPASS_HZ,
    DEFAULT_HIGHPASS_Q,
)


class AudioLoader:
    """Loads audio files and conditions them like the live capture chain.

    The live capture path feeds the analyser through an 80 Hz, Q 0.5
    biquad high-pass to remove low rumble; the same causal filter is
    applied here so recordings are analysed the way a microphone stream
    would be.
    """

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".mp4"}

    def __init__(
        self,
        target_sr: int = DEFAULT_SR,
        mono: bool = True,
        normalize: bool = False,
        highpass_hz: Optional[float] = DEFAULT_HIGHPASS_HZ,
        window_size: int = DEFAULT_WINDOW_SIZE,
        highpass_q: float = DEFAULT_HIGHPASS_Q,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Target sample rate for resampling
            mono: Convert to mono if True
            normalize: Normalize audio amplitude if True
            highpass_hz: High-pass cutoff in Hz, None or 0 to disable
            window_size: Analysis window length, used to warn on short files
            highpass_q: Quality factor of the high-pass; 0.5 gives a gentle knee
        """
        self.target_sr = target_sr
        self.mono = mono
        self.normalize = normalize
        self.highpass_hz = highpass_hz
        self.window_size = window_size
        self.highpass_q = highpass_q

    def load(self, path: str) -> Tuple[np.ndarray, int]:
        """
        Load audio file and preprocess.

        Args:
            path: Path to audio file

        Returns:
            Tuple of (audio array, sample rate)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        # Load with librosa (handles resampling and mono conversion)
        audio, sr = librosa.load(
            str(path),
            sr=self.target_sr,
            mono=self.mono,
        )

        if len(audio) < self.window_size:
            warnings.warn(
                f"{path.name} holds {len(audio)} samples, "
                f"shorter than one {self.window_size}-sample window"
            )

        return self.preprocess(audio, sr), sr

    def preprocess(self, audio: np.ndarray, sr: int) -> np.ndarray:
        """Apply the capture chain: high-pass filter, then optional normalization."""
        audio = np.asarray(audio, dtype=np.float64)
        if self.highpass_hz:
            audio = self._highpass(audio, sr)
        if self.normalize:
            audio = self._normalize(audio)
        return audio

    def _highpass(self, audio: np.ndarray, sr: int) -> np.ndarray:
        """Causal second-order high-pass at highpass_hz with quality highpass_q."""
        return signal.sosfilt(self.highpass_sos(sr), audio)

    def highpass_sos(self, sr: int) -> np.ndarray:
        """
        Design the capture high-pass as second-order sections.

        The analog prototype s^2 / (s^2 + (w0/Q) s + w0^2) is prewarped at
        the cutoff and mapped with the bilinear transform, so the digital
        response at the cutoff has gain Q (-6 dB for Q = 0.5).

        Raises:
            ValueError: If the cutoff is not below Nyquist or Q is not positive
        """
        nyquist = sr / 2
        if self.highpass_hz >= nyquist:
            raise ValueError(
                f"High-pass cutoff {self.highpass_hz} Hz must be below Nyquist ({nyquist} Hz)"
            )
        if self.highpass_q <= 0:
            raise ValueError(f"High-pass Q must be positive, got {self.highpass_q}")

        w0 = 2 * sr * np.tan(np.pi * self.highpass_hz / sr)
        b, a = signal.bilinear([1.0, 0.0, 0.0], [1.0, w0 / self.highpass_q, w0**2], fs=sr)
        return signal.tf2sos(b, a)

    def _normalize(self, audio: np.ndarray) -> np.ndarray:
        """Normalize audio to [-1, 1] range using peak normalization."""
        peak = np.abs(audio).max() if len(audio) else 0.0
        if peak > 0:
            audio = audio / peak
        return audio

    def get_duration(self, audio: np.ndarray, sr: Optional[int] = None) -> float:
        """Get duration in seconds."""
        sr = sr or self.target_sr
        return len(audio) / sr
