"""Port: external audio transcoder producing the canonical waveform."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from whisper_scribe.l1_entities.cancel_token import CancelToken


class AudioNormalizer(Protocol):
    def normalize(self, input_path: Path, output_path: Path, cancel: CancelToken | None = None) -> Path:
        """Convert *input_path* into a mono 16 kHz s16le waveform at *output_path*."""
        ...
