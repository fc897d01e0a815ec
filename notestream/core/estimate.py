"""Tagged pitch estimation result."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np


class NoPitchReason(Enum):
    """Why a window produced no pitch."""

    SILENCE = "silence"
    TOO_SHORT = "too_short"
    NO_PERIODICITY = "no_periodicity"


@dataclass(frozen=True)
class NoPitch:
    """No fundamental frequency found in the window."""

    reason: NoPitchReason

    @property
    def detected(self) -> bool:
        return False


@dataclass(frozen=True)
class Detected:
    """A fundamental frequency estimate in Hz."""

    frequency: float

    def __post_init__(self):
        if not np.isfinite(self.frequency) or self.frequency <= 0:
            raise ValueError(
                f"Detected frequency must be positive and finite, got {self.frequency}"
            )

    @property
    def detected(self) -> bool:
        return True


PitchEstimate = Union[Detected, NoPitch]
