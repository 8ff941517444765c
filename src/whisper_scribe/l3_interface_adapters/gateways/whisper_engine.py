"""Gateway: whisper.cpp engine — implements SpeechEngine port."""

from __future__ import annotations

import contextlib
import os
from collections.abc import Iterator

import numpy as np
from pywhispercpp.model import Model

from whisper_scribe.l1_entities.transcript import Segment


@contextlib.contextmanager
def _suppress_c_stdout():
    """Redirect C-level stdout and stderr to /dev/null.

    whisper.cpp prints init/progress messages directly via C fprintf,
    bypassing Python's sys.stdout. This pollutes CLI output.
    """
    devnull = os.open(os.devnull, os.O_WRONLY)
    old_stdout = os.dup(1)
    old_stderr = os.dup(2)
    try:
        os.dup2(devnull, 1)
        os.dup2(devnull, 2)
        yield
    finally:
        os.dup2(old_stdout, 1)
        os.dup2(old_stderr, 2)
        os.close(devnull)
        os.close(old_stdout)
        os.close(old_stderr)


class WhisperCppContext:
    """Processing context over a pywhispercpp Model.

    pywhispercpp returns all segments at once, so the stream is a plain
    iterator and exhaustion is unambiguous.
    """

    def __init__(self, model: Model) -> None:
        self._model: Model | None = model
        self._segments: Iterator[Segment] = iter(())

    def process(self, samples: np.ndarray) -> None:
        if self._model is None:
            raise RuntimeError('Context is closed')
        audio = np.ascontiguousarray(samples, dtype=np.float32)
        with _suppress_c_stdout():
            raw_segments = self._model.transcribe(audio)
        # whisper.cpp reports timestamps in centiseconds
        self._segments = iter(
            [Segment(text=seg.text, start=seg.t0 / 100.0, end=seg.t1 / 100.0) for seg in raw_segments]
        )

    def next_segment(self) -> Segment | None:
        return next(self._segments, None)

    def close(self) -> None:
        self._model = None
        self._segments = iter(())


class WhisperCppModel:
    def __init__(self, model: Model) -> None:
        self._model: Model | None = model

    def new_context(self) -> WhisperCppContext:
        if self._model is None:
            raise RuntimeError('Model has been released')
        return WhisperCppContext(self._model)

    def close(self) -> None:
        """Release the model, suppressing C-level teardown noise."""
        if self._model is not None:
            with _suppress_c_stdout():
                del self._model
                self._model = None


class WhisperCppEngine:
    """pywhispercpp adapter. Handles model loading and C stdout suppression."""

    def load_model(self, model_path: str) -> WhisperCppModel:
        with _suppress_c_stdout():
            model = Model(model_path, print_progress=False, print_realtime=False)
        return WhisperCppModel(model)
