"""Use case: transcription pipeline — normalize, decode, infer, aggregate."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterator, Sequence
from pathlib import Path

import numpy as np

from whisper_scribe.l1_entities.audio_constants import SAMPLE_RATE
from whisper_scribe.l1_entities.cancel_token import CancelToken
from whisper_scribe.l1_entities.errors import (
    AudioReadError,
    EmptyInputError,
    NoSpeechDetectedError,
    SinkFailureError,
    TranscriptionCancelledError,
    TranscriptionFailedError,
)
from whisper_scribe.l1_entities.transcript import Segment, TranscriptResult
from whisper_scribe.l2_use_cases.engine_session import EngineSession
from whisper_scribe.l2_use_cases.ports.audio_normalizer import AudioNormalizer
from whisper_scribe.l2_use_cases.ports.result_sink import ResultSink
from whisper_scribe.l2_use_cases.ports.speech_engine import EngineContext
from whisper_scribe.l2_use_cases.ports.waveform_decoder import WaveformDecoder

log = logging.getLogger('wsc.transcribe')


@contextlib.contextmanager
def temp_path(suffix: str, directory: str | None = None) -> Iterator[Path]:
    """Reserve a unique temporary file path and remove the file on exit, whatever happens."""
    fd, name = tempfile.mkstemp(prefix='wsc_', suffix=suffix, dir=directory)
    os.close(fd)
    path = Path(name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)
        log.debug('Removed temp file %s', path)


def _check_cancel(cancel: CancelToken | None) -> None:
    if cancel is not None and cancel.cancelled:
        raise TranscriptionCancelledError('Transcription cancelled')


def run_inference(context: EngineContext, samples: np.ndarray) -> TranscriptResult:
    """Submit *samples*, drain every segment, and join them into one trimmed transcript.

    Raises:
        TranscriptionFailedError: the engine failed during processing or mid-stream.
        NoSpeechDetectedError: the engine produced no non-whitespace text.
    """
    try:
        context.process(samples)
    except Exception as e:
        raise TranscriptionFailedError(f'Transcription failed: {e}') from e

    segments: list[Segment] = []
    while True:
        try:
            segment = context.next_segment()
        except Exception as e:
            raise TranscriptionFailedError(f'Failed to read segment {len(segments)}: {e}') from e
        if segment is None:
            break
        segments.append(segment)

    text = ''.join(f'{seg.text} ' for seg in segments).strip()
    if not text:
        raise NoSpeechDetectedError('No speech detected in audio')

    log.info(
        'Transcribed %.1fs of audio into %d segments (%d chars)',
        len(samples) / SAMPLE_RATE,
        len(segments),
        len(text),
    )
    return TranscriptResult(text=text, segments=segments)


class TranscribeUseCase:
    """Routes each entry path to a flat sample buffer and through the engine.

    Every temporary artifact is created and removed within the call that
    needs it. The session lock is held for the whole call, so at most one
    transcription runs per session.
    """

    def __init__(
        self,
        session: EngineSession,
        normalizer: AudioNormalizer,
        decoder: WaveformDecoder,
        sink: ResultSink | None = None,
        temp_dir: str | None = None,
        recording_suffix: str = '.webm',
    ) -> None:
        self._session = session
        self._normalizer = normalizer
        self._decoder = decoder
        self._sink = sink
        self._temp_dir = temp_dir
        self._recording_suffix = recording_suffix

    def transcribe_file(self, path: str | Path, cancel: CancelToken | None = None) -> TranscriptResult:
        with self._session.acquire_context() as context:
            log.info('Transcribing file %s', path)
            with temp_path('.wav', self._temp_dir) as wav_path:
                samples = self._normalize_and_decode(Path(path), wav_path, cancel)
                return run_inference(context, samples)

    def transcribe_samples(self, samples: Sequence[float] | np.ndarray) -> TranscriptResult:
        """Transcribe a buffer the caller attests is already mono 16 kHz float PCM."""
        with self._session.acquire_context() as context:
            buffer = np.ascontiguousarray(samples, dtype=np.float32).reshape(-1)
            if buffer.size == 0:
                raise EmptyInputError('No audio data provided')
            log.info('Transcribing %d raw samples', buffer.size)
            return run_inference(context, buffer)

    def transcribe_recording(self, blob: bytes, cancel: CancelToken | None = None) -> TranscriptResult:
        """Transcribe an opaque recorded blob, then hand the text to the result sink."""
        with self._session.acquire_context() as context:
            if not blob:
                raise EmptyInputError('No recording data provided')
            log.info('Transcribing recording (%d bytes)', len(blob))
            with temp_path(self._recording_suffix, self._temp_dir) as raw_path:
                with temp_path('.wav', self._temp_dir) as wav_path:
                    try:
                        raw_path.write_bytes(blob)
                    except OSError as e:
                        raise AudioReadError(f'Failed to save recording to {raw_path}: {e}') from e
                    samples = self._normalize_and_decode(raw_path, wav_path, cancel)
                    result = run_inference(context, samples)

        return self._publish(result)

    def _normalize_and_decode(self, source: Path, wav_path: Path, cancel: CancelToken | None) -> np.ndarray:
        _check_cancel(cancel)
        self._normalizer.normalize(source, wav_path, cancel)
        _check_cancel(cancel)
        samples = self._decoder.decode(wav_path)
        _check_cancel(cancel)
        if samples.size == 0:
            raise NoSpeechDetectedError(f'No audio samples decoded from {source}')
        return samples

    def _publish(self, result: TranscriptResult) -> TranscriptResult:
        if self._sink is None:
            return result
        try:
            self._sink.publish(result.text)
        except SinkFailureError as e:
            log.warning('Result sink failed: %s', e)
            return result.model_copy(update={'publish_error': str(e)})
        log.info('Transcript published to result sink')
        return result.model_copy(update={'published': True})
