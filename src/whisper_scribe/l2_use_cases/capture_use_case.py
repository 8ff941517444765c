"""Use case: capture a bounded microphone buffer for one-shot transcription."""

from __future__ import annotations

import logging
import threading

import numpy as np

from whisper_scribe.l1_entities.audio_constants import CHANNELS, SAMPLE_RATE
from whisper_scribe.l2_use_cases.ports.audio_source import AudioSource

log = logging.getLogger('wsc.capture')


class CaptureAudioUseCase:
    """Reads from an AudioSource until *max_seconds* elapse or *stop* is set."""

    def __init__(self, source: AudioSource) -> None:
        self._source = source

    def execute(self, max_seconds: float | None = None, stop: threading.Event | None = None) -> np.ndarray:
        limit = int(max_seconds * SAMPLE_RATE) if max_seconds is not None else None
        chunks: list[np.ndarray] = []
        captured = 0

        self._source.open(SAMPLE_RATE, CHANNELS)
        try:
            while limit is None or captured < limit:
                if stop is not None and stop.is_set():
                    break
                chunk = self._source.read(timeout=0.1)
                if chunk is None:
                    continue
                chunks.append(chunk)
                captured += len(chunk)
        finally:
            self._source.close()

        audio = np.concatenate(chunks).astype(np.float32) if chunks else np.array([], dtype=np.float32)
        if limit is not None:
            audio = audio[:limit]
        log.info('Captured %.1fs of audio', len(audio) / SAMPLE_RATE)
        return audio
