"""Sample window - one fixed-size block of captured audio."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class SampleWindow:
    """Contiguous time-domain samples plus the sample rate they were captured at.

    The samples are stored as a read-only float64 array so a window cannot
    be modified after it is produced.

    Attributes:
        samples: Amplitudes, nominally in [-1, 1]
        sample_rate: Samples per second
    """

    samples: np.ndarray
    sample_rate: float

    def __post_init__(self):
        samples = np.array(self.samples, dtype=np.float64)

        if samples.ndim != 1:
            raise ValueError(
                f"SampleWindow expects 1-D samples, got shape {samples.shape}"
            )
        if samples.size == 0:
            raise ValueError("SampleWindow cannot be empty")
        if not np.all(np.isfinite(samples)):
            raise ValueError("SampleWindow contains non-finite samples")
        if not self.sample_rate > 0:
            raise ValueError(f"Sample rate must be positive, got {self.sample_rate}")

        samples.flags.writeable = False
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "sample_rate", float(self.sample_rate))

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def duration_ms(self) -> float:
        """Window length in milliseconds."""
        return len(self.samples) * 1000.0 / self.sample_rate
