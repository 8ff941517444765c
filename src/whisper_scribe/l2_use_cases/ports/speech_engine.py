"""Port: speech-to-text inference engine."""

from __future__ import annotations

from typing import Protocol

import numpy as np

from whisper_scribe.l1_entities.transcript import Segment


class EngineContext(Protocol):
    """Processing context derived from a loaded model. Not thread-safe."""

    def process(self, samples: np.ndarray) -> None:
        """Run inference over a complete mono 16 kHz float32 buffer. Raises on engine error."""
        ...

    def next_segment(self) -> Segment | None:
        """Return the next recognized segment, or None once the stream is exhausted.

        Any exception raised here is a mid-stream failure, never end-of-stream.
        """
        ...

    def close(self) -> None:
        """Release the context."""
        ...


class EngineModel(Protocol):
    """A loaded model from which processing contexts are derived."""

    def new_context(self) -> EngineContext:
        """Create a processing context. Raises on failure."""
        ...

    def close(self) -> None:
        """Release the model."""
        ...


class SpeechEngine(Protocol):
    """Abstract engine factory. Zero framework types leak through."""

    def load_model(self, model_path: str) -> EngineModel:
        """Load model weights from an existing file. Raises if the engine rejects them."""
        ...
