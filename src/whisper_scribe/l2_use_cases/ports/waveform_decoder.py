"""Port: canonical waveform decoder."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import numpy as np


class WaveformDecoder(Protocol):
    def decode(self, path: Path) -> np.ndarray:
        """Read a canonical waveform file into float32 samples in [-1.0, 1.0)."""
        ...
