"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from collections.abc import Callable

from whisper_scribe.l1_entities.config import AppConfig
from whisper_scribe.l2_use_cases.engine_session import EngineSession
from whisper_scribe.l2_use_cases.ports.audio_normalizer import AudioNormalizer
from whisper_scribe.l2_use_cases.ports.model_resolver import ModelResolver
from whisper_scribe.l2_use_cases.ports.result_sink import ResultSink
from whisper_scribe.l2_use_cases.ports.speech_engine import SpeechEngine
from whisper_scribe.l2_use_cases.ports.waveform_decoder import WaveformDecoder
from whisper_scribe.l2_use_cases.transcribe_use_case import TranscribeUseCase
from whisper_scribe.l3_interface_adapters.controllers.transcription_controller import TranscriptionController
from whisper_scribe.l3_interface_adapters.gateways.clipboard_sink import ClipboardSink
from whisper_scribe.l3_interface_adapters.gateways.ffmpeg_normalizer import FfmpegNormalizer
from whisper_scribe.l3_interface_adapters.gateways.hf_model_resolver import HfModelResolver
from whisper_scribe.l3_interface_adapters.gateways.wav_codec import WavDecoder


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        config: AppConfig,
        engine: SpeechEngine | None = None,
        on_download_progress: Callable[[int], None] | None = None,
    ) -> None:
        self.config = config

        self.engine: SpeechEngine = engine or self._build_engine()
        self.session = EngineSession(self.engine)
        self.normalizer: AudioNormalizer = FfmpegNormalizer(
            binary=config.transcoder.binary,
            timeout=config.transcoder.timeout,
        )
        self.decoder: WaveformDecoder = WavDecoder()
        self.sink: ResultSink | None = ClipboardSink(config.clipboard.command) if config.clipboard.enabled else None
        self.model_resolver: ModelResolver = HfModelResolver(on_progress=on_download_progress)

        self.use_case = TranscribeUseCase(
            session=self.session,
            normalizer=self.normalizer,
            decoder=self.decoder,
            sink=self.sink,
            temp_dir=config.temp_dir,
            recording_suffix=config.recording.suffix,
        )
        self.controller = TranscriptionController(
            session=self.session,
            use_case=self.use_case,
            model_resolver=self.model_resolver,
        )

    @staticmethod
    def _build_engine() -> SpeechEngine:
        from whisper_scribe.l3_interface_adapters.gateways.whisper_engine import (  # noqa: PLC0415 -- deferred: pywhispercpp not loaded on --help
            WhisperCppEngine,
        )

        return WhisperCppEngine()
