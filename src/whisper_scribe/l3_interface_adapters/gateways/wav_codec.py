"""Gateway: canonical waveform codec — implements WaveformDecoder port.

The canonical container is RIFF/WAVE holding mono 16 kHz signed 16-bit
little-endian PCM. Chunks are walked rather than assuming a 44-byte header,
so files with LIST/fact chunks ahead of ``data`` decode correctly.
"""

from __future__ import annotations

import struct
import wave
from pathlib import Path

import numpy as np

from whisper_scribe.l1_entities.audio_constants import CHANNELS, PCM_SCALE, SAMPLE_RATE, SAMPLE_WIDTH
from whisper_scribe.l1_entities.errors import AudioReadError, MalformedWaveformError, TruncatedAudioError

_WAVE_FORMAT_PCM = 1
_CHUNK_HEADER = struct.Struct('<4sI')
_FMT_BODY = struct.Struct('<HHIIHH')


def _check_fmt(body: bytes) -> None:
    if len(body) < _FMT_BODY.size:
        raise MalformedWaveformError(f'fmt chunk too short ({len(body)} bytes)')
    tag, channels, rate, _byte_rate, _block_align, bits = _FMT_BODY.unpack_from(body)
    if tag != _WAVE_FORMAT_PCM:
        raise MalformedWaveformError(f'Unsupported format tag {tag}, expected PCM')
    if channels != CHANNELS or rate != SAMPLE_RATE or bits != SAMPLE_WIDTH * 8:
        raise MalformedWaveformError(
            f'Expected {CHANNELS} ch / {SAMPLE_RATE} Hz / {SAMPLE_WIDTH * 8}-bit, '
            f'got {channels} ch / {rate} Hz / {bits}-bit'
        )


def _locate_pcm(data: bytes) -> bytes:
    """Return the bytes of the ``data`` chunk after validating the container."""
    if len(data) < 12 or data[:4] != b'RIFF' or data[8:12] != b'WAVE':
        raise MalformedWaveformError('Not a RIFF/WAVE file')

    offset = 12
    seen_fmt = False
    while offset + _CHUNK_HEADER.size <= len(data):
        chunk_id, size = _CHUNK_HEADER.unpack_from(data, offset)
        body_start = offset + _CHUNK_HEADER.size
        if chunk_id == b'fmt ':
            _check_fmt(data[body_start : body_start + size])
            seen_fmt = True
        elif chunk_id == b'data':
            if not seen_fmt:
                raise MalformedWaveformError('data chunk precedes fmt chunk')
            # Streamed writers leave the size unset; take what is actually there.
            return data[body_start : min(body_start + size, len(data))]
        offset = body_start + size + (size & 1)

    raise MalformedWaveformError('No data chunk found')


def decode_wav_bytes(data: bytes) -> np.ndarray:
    """Decode an in-memory canonical waveform into float32 samples.

    Raises:
        MalformedWaveformError: not a mono 16 kHz 16-bit PCM RIFF container.
        TruncatedAudioError: the PCM payload has an odd byte count.
    """
    pcm = _locate_pcm(data)
    if len(pcm) % SAMPLE_WIDTH:
        raise TruncatedAudioError(f'PCM payload of {len(pcm)} bytes ends mid-sample')
    return np.frombuffer(pcm, dtype='<i2').astype(np.float32) / np.float32(PCM_SCALE)


def encode_wav(samples: np.ndarray, path: Path) -> Path:
    """Write float samples as a canonical waveform, clipping to [-1.0, 1.0]."""
    clipped = np.clip(np.asarray(samples, dtype=np.float32).reshape(-1), -1.0, 1.0)
    pcm = np.clip(np.round(clipped * PCM_SCALE), -32768, 32767).astype('<i2')
    with wave.open(str(path), 'wb') as wf:
        wf.setnchannels(CHANNELS)
        wf.setsampwidth(SAMPLE_WIDTH)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return path


class WavDecoder:
    def decode(self, path: Path) -> np.ndarray:
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise AudioReadError(f'Failed to read WAV {path}: {e}') from e
        return decode_wav_bytes(data)
