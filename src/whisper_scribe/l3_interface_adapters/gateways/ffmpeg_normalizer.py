"""Gateway: ffmpeg normalizer — converts any audio ffmpeg can read into the canonical waveform."""

from __future__ import annotations

import logging
import shutil
import subprocess  # noqa: S404 -- intentional: shells out to ffmpeg with a fixed arg list, not shell=True
import time
from pathlib import Path

from whisper_scribe.l1_entities.audio_constants import CHANNELS, SAMPLE_RATE
from whisper_scribe.l1_entities.cancel_token import CancelToken
from whisper_scribe.l1_entities.errors import ConversionFailedError, TranscriptionCancelledError

log = logging.getLogger('wsc.ffmpeg')

_POLL_INTERVAL = 0.1  # seconds between cancellation checks


def build_command(binary: str, input_path: Path, output_path: Path) -> list[str]:
    return [
        binary,
        '-y',
        '-i',
        str(input_path),
        '-ar',
        str(SAMPLE_RATE),
        '-ac',
        str(CHANNELS),
        '-c:a',
        'pcm_s16le',
        str(output_path),
    ]


class FfmpegNormalizer:
    """Runs ffmpeg as a child process; the process is killed on cancel or timeout."""

    def __init__(self, binary: str = 'ffmpeg', timeout: float = 300.0) -> None:
        self._binary = binary
        self._timeout = timeout

    def normalize(self, input_path: Path, output_path: Path, cancel: CancelToken | None = None) -> Path:
        """Write a mono 16 kHz s16le WAV of *input_path* to *output_path*.

        Raises:
            ConversionFailedError: ffmpeg is missing, failed to start, exited
                                   non-zero, or timed out.
            TranscriptionCancelledError: *cancel* fired while ffmpeg was running.
        """
        if shutil.which(self._binary) is None:
            raise ConversionFailedError(
                f'{self._binary} is required but not found on PATH.\n'
                '  macOS:  brew install ffmpeg\n  Debian: apt install ffmpeg'
            )

        cmd = build_command(self._binary, input_path, output_path)
        log.debug('Running %s', ' '.join(cmd))
        try:
            proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)  # noqa: S603
        except OSError as e:
            raise ConversionFailedError(f'Failed to launch {self._binary}: {e}') from e

        deadline = time.monotonic() + self._timeout
        while True:
            try:
                output, _ = proc.communicate(timeout=_POLL_INTERVAL)
                break
            except subprocess.TimeoutExpired:
                if cancel is not None and cancel.cancelled:
                    proc.kill()
                    proc.communicate()
                    log.info('Conversion of %s cancelled', input_path)
                    raise TranscriptionCancelledError(f'Conversion of {input_path} cancelled') from None
                if time.monotonic() >= deadline:
                    proc.kill()
                    output, _ = proc.communicate()
                    raise ConversionFailedError(
                        f'{self._binary} timed out after {self._timeout:g}s processing: {input_path}',
                        _decode(output),
                    ) from None

        if proc.returncode != 0:
            text = _decode(output)
            log.error('%s exited with code %s for %s', self._binary, proc.returncode, input_path)
            raise ConversionFailedError(
                f'{self._binary} conversion failed with exit code {proc.returncode} for: {input_path}',
                text,
            )

        return output_path


def _decode(output: bytes | None) -> str:
    return (output or b'').decode('utf-8', errors='replace').strip()
