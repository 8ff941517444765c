"""TranscriptionController — the public surface a shell or GUI calls into."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from whisper_scribe.l1_entities.cancel_token import CancelToken
from whisper_scribe.l1_entities.errors import ModelResolutionError, NoSpeechDetectedError, WhisperScribeError
from whisper_scribe.l1_entities.transcript import TranscriptResult
from whisper_scribe.l2_use_cases.engine_session import EngineSession
from whisper_scribe.l2_use_cases.ports.model_resolver import ModelResolver
from whisper_scribe.l2_use_cases.transcribe_use_case import TranscribeUseCase

log = logging.getLogger('wsc.controller')


class TranscriptionController:
    """Synchronous facade over the session and the transcription pipeline.

    Each operation returns the transcript text or raises a WhisperScribeError
    subclass. ``last_result`` keeps the full result of the latest successful
    call, including segments and sink status.
    """

    def __init__(
        self,
        session: EngineSession,
        use_case: TranscribeUseCase,
        model_resolver: ModelResolver | None = None,
    ) -> None:
        self._session = session
        self._use_case = use_case
        self._model_resolver = model_resolver
        self.last_result: TranscriptResult | None = None

    def load_model(self, model: str) -> None:
        path = self._resolve(model)
        self._session.load_model(path)

    def _resolve(self, model: str) -> str:
        if self._model_resolver is None:
            return model
        try:
            return self._model_resolver.resolve(model)
        except Exception as e:
            log.error('Could not resolve model %s: %s', model, e)
            raise ModelResolutionError(f'Failed to resolve model {model}: {e}') from e

    def describe_model(self) -> str:
        return self._session.describe()

    def transcribe_file(self, path: str | Path, cancel: CancelToken | None = None) -> str:
        return self._run('file', self._use_case.transcribe_file, path, cancel)

    def transcribe_samples(self, samples: Sequence[float] | np.ndarray) -> str:
        return self._run('samples', self._use_case.transcribe_samples, samples)

    def transcribe_recording(self, blob: bytes, cancel: CancelToken | None = None) -> str:
        return self._run('recording', self._use_case.transcribe_recording, blob, cancel)

    def close(self) -> None:
        self._session.close()

    def _run(self, kind: str, fn, *args) -> str:
        try:
            result = fn(*args)
        except NoSpeechDetectedError:
            log.info('No speech detected (%s)', kind)
            raise
        except WhisperScribeError as e:
            log.error('Transcription of %s failed: %s', kind, e)
            raise
        self.last_result = result
        return result.text
