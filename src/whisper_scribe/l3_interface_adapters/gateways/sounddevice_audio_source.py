"""Gateway: default-microphone capture via sounddevice — implements AudioSource port."""

from __future__ import annotations

import logging
import queue

import numpy as np
import sounddevice as sd

from whisper_scribe.l1_entities.audio_constants import CHANNELS, SAMPLE_RATE

log = logging.getLogger('wsc.mic')


class SounddeviceAudioSource:
    """Buffers PortAudio callback blocks until the capture loop pulls them.

    Blocks are captured directly at 16 kHz mono float32, so no resampling or
    normalization is needed before transcription.
    """

    def __init__(self) -> None:
        self._stream: sd.InputStream | None = None
        self._blocks: queue.Queue[np.ndarray] = queue.Queue()

    def open(self, sample_rate: int = SAMPLE_RATE, channels: int = CHANNELS) -> None:
        def _on_block(indata, frames, time_info, status):
            if status:
                log.debug('Input stream status: %s', status)
            self._blocks.put(indata.copy())

        self._stream = sd.InputStream(
            samplerate=sample_rate,
            channels=channels,
            dtype='float32',
            callback=_on_block,
        )
        self._stream.start()
        log.info('Microphone open at %d Hz, %d ch', sample_rate, channels)

    def read(self, timeout: float = 0.1) -> np.ndarray | None:
        try:
            return self._blocks.get(timeout=timeout).reshape(-1)
        except queue.Empty:
            return None

    def close(self) -> None:
        if self._stream is None:
            return
        self._stream.stop()
        self._stream.close()
        self._stream = None
        log.info('Microphone closed')
