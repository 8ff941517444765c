"""Port: microphone input for one-shot capture (``record`` command)."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class AudioSource(Protocol):
    """Pull-based microphone stream, opened once per capture and closed after it."""

    def open(self, sample_rate: int, channels: int) -> None: ...

    def read(self, timeout: float) -> np.ndarray | None:
        """Next flat float32 block, or None if nothing arrived within *timeout* seconds."""
        ...

    def close(self) -> None: ...
