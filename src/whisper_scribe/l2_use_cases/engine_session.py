"""Use case: engine session — owns the loaded model and its processing context."""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Iterator
from pathlib import Path

from whisper_scribe.l1_entities.errors import (
    ContextCreationError,
    EngineNotReadyError,
    ModelLoadError,
    ModelNotFoundError,
    SessionBusyError,
)
from whisper_scribe.l2_use_cases.ports.speech_engine import EngineContext, EngineModel, SpeechEngine

log = logging.getLogger('wsc.session')

NO_MODEL_LOADED = 'No model loaded'


class EngineSession:
    """Exclusive holder of one model + context pair.

    A context never exists without its model: both are installed together by
    ``load_model()`` and released together by ``close()`` or by a later load.
    The lock serializes transcriptions; a load that finds it held is rejected
    with SessionBusyError instead of swapping the engine out mid-inference.
    """

    def __init__(self, engine: SpeechEngine) -> None:
        self._engine = engine
        self._lock = threading.Lock()
        self._model: EngineModel | None = None
        self._context: EngineContext | None = None
        self._model_path: str | None = None

    @property
    def is_ready(self) -> bool:
        return self._context is not None

    @property
    def model_path(self) -> str | None:
        return self._model_path

    def describe(self) -> str:
        if self._context is None or self._model_path is None:
            return NO_MODEL_LOADED
        return f'Model loaded: {Path(self._model_path).name}'

    def load_model(self, model_path: str) -> None:
        """Load *model_path* and replace the current session only if every step succeeds."""
        if not self._lock.acquire(blocking=False):
            raise SessionBusyError('Cannot load a model while a transcription is in progress')
        try:
            if not Path(model_path).is_file():
                raise ModelNotFoundError(f'Model file not found: {model_path}')

            log.info('Loading model %s', model_path)
            try:
                model = self._engine.load_model(model_path)
            except Exception as e:
                raise ModelLoadError(f'Failed to load model {model_path}: {e}') from e

            try:
                context = model.new_context()
            except Exception as e:
                model.close()
                raise ContextCreationError(f'Failed to create context for {model_path}: {e}') from e

            self._release()
            self._model = model
            self._context = context
            self._model_path = model_path
            log.info('Model ready: %s', Path(model_path).name)
        finally:
            self._lock.release()

    @contextlib.contextmanager
    def acquire_context(self) -> Iterator[EngineContext]:
        """Hold the session for one transcription and yield its context."""
        with self._lock:
            if self._context is None:
                raise EngineNotReadyError('Model not loaded. Please load a model first')
            yield self._context

    def close(self) -> None:
        with self._lock:
            self._release()

    def _release(self) -> None:
        context, model, path = self._context, self._model, self._model_path
        self._context = None
        self._model = None
        self._model_path = None
        try:
            if context is not None:
                context.close()
        finally:
            if model is not None:
                model.close()
        if path is not None:
            log.debug('Released model %s', path)
