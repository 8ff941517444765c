"""Domain error types."""

from __future__ import annotations


class WhisperScribeError(Exception):
    """Base class for every recoverable failure raised by the pipeline."""


class ModelNotFoundError(WhisperScribeError):
    """Raised when a model path does not resolve to an existing file."""


class ModelResolutionError(ModelNotFoundError):
    """Raised when a model name cannot be resolved to a local file (download or cache failure)."""


class ModelLoadError(WhisperScribeError):
    """Raised when the engine rejects a model file."""


class ContextCreationError(WhisperScribeError):
    """Raised when a processing context cannot be derived from a loaded model."""


class EngineNotReadyError(WhisperScribeError):
    """Raised when a transcription is requested before any model was loaded."""


class SessionBusyError(WhisperScribeError):
    """Raised when a model load is attempted while a transcription is in flight."""


class ConversionFailedError(WhisperScribeError):
    """Raised when the external transcoder cannot produce the canonical waveform."""

    def __init__(self, message: str, output: str = '') -> None:
        super().__init__(f'{message}\nOutput: {output}' if output else message)
        self.output = output


class AudioReadError(WhisperScribeError):
    """Raised when a waveform file cannot be read."""


class MalformedWaveformError(AudioReadError):
    """Raised when a waveform file is not a mono 16 kHz 16-bit PCM RIFF container."""


class TruncatedAudioError(WhisperScribeError):
    """Raised when the PCM payload ends in the middle of a sample."""


class EmptyInputError(WhisperScribeError):
    """Raised when a zero-length sample buffer is submitted."""


class TranscriptionFailedError(WhisperScribeError):
    """Raised when the engine reports an error during inference or segment retrieval."""


class NoSpeechDetectedError(WhisperScribeError):
    """Raised when inference completes but yields no text."""


class SinkFailureError(WhisperScribeError):
    """Raised when a finished transcript cannot be delivered to the result sink."""


class TranscriptionCancelledError(WhisperScribeError):
    """Raised when a cancellation token fires before the pipeline completes."""
