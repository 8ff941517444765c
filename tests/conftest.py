"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import tempfile
from pathlib import Path

import numpy as np
import pytest

from whisper_scribe.l1_entities.config import AppConfig
from whisper_scribe.l1_entities.errors import ConversionFailedError, SinkFailureError
from whisper_scribe.l1_entities.transcript import Segment
from whisper_scribe.l2_use_cases.engine_session import EngineSession
from whisper_scribe.l2_use_cases.transcribe_use_case import TranscribeUseCase
from whisper_scribe.l3_interface_adapters.gateways.wav_codec import WavDecoder, encode_wav
from whisper_scribe.l4_frameworks_and_drivers.infra_config import build_app_config

# --- Protocol-conforming Fakes ---


class FakeContext:
    """Fake engine context — replays a fixed list of segment texts per process() call."""

    def __init__(self, texts: list[str] | None = None):
        self.texts = list(texts or [])
        self.process_calls: list[np.ndarray] = []
        self.process_error: Exception | None = None
        self.segment_error_at: int | None = None
        self.closed = False
        self._pending: list[Segment] = []
        self._served = 0

    def process(self, samples: np.ndarray) -> None:
        self.process_calls.append(samples)
        if self.process_error is not None:
            raise self.process_error
        self._pending = [Segment(text=t) for t in self.texts]
        self._served = 0

    def next_segment(self) -> Segment | None:
        if self.segment_error_at is not None and self._served == self.segment_error_at:
            raise RuntimeError('segment decode failed')
        if not self._pending:
            return None
        self._served += 1
        return self._pending.pop(0)

    def close(self) -> None:
        self.closed = True


class FakeModel:
    def __init__(self, context: FakeContext, context_error: Exception | None = None):
        self.context = context
        self.context_error = context_error
        self.closed = False

    def new_context(self) -> FakeContext:
        if self.context_error is not None:
            raise self.context_error
        return self.context

    def close(self) -> None:
        self.closed = True


class FakeEngine:
    """Fake SpeechEngine. Each load returns a fresh FakeModel sharing the configured texts."""

    def __init__(self, texts: list[str] | None = None):
        self.texts = list(texts or [])
        self.load_calls: list[str] = []
        self.models: list[FakeModel] = []
        self.load_error: Exception | None = None
        self.context_error: Exception | None = None

    def load_model(self, model_path: str) -> FakeModel:
        self.load_calls.append(model_path)
        if self.load_error is not None:
            raise self.load_error
        model = FakeModel(FakeContext(self.texts), self.context_error)
        self.models.append(model)
        return model

    @property
    def context(self) -> FakeContext:
        return self.models[-1].context


class FakeNormalizer:
    """Writes a canonical WAV of fixed samples instead of running ffmpeg."""

    def __init__(self, samples: np.ndarray | None = None):
        self.samples = samples if samples is not None else np.full(1600, 0.25, dtype=np.float32)
        self.calls: list[tuple[Path, Path]] = []
        self.inputs_seen: list[bytes] = []
        self.error: Exception | None = None

    def normalize(self, input_path: Path, output_path: Path, cancel=None) -> Path:
        self.calls.append((input_path, output_path))
        self.inputs_seen.append(Path(input_path).read_bytes())
        if self.error is not None:
            raise self.error
        encode_wav(self.samples, output_path)
        return output_path


class FakeSink:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.published: list[str] = []

    def publish(self, text: str) -> None:
        if self.fail:
            raise SinkFailureError('clipboard unavailable')
        self.published.append(text)


# --- Standard Fixtures ---


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def isolated_tmp(tmp_path: Path, monkeypatch) -> Path:
    """Route tempfile into a dedicated directory so leftovers can be counted."""
    d = tmp_path / 'scratch'
    d.mkdir()
    monkeypatch.setattr(tempfile, 'tempdir', str(d))
    return d


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    p = tmp_path / 'ggml-base.en.bin'
    p.write_bytes(b'fake-weights')
    return p


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    p = tmp_path / 'speech.mp3'
    p.write_bytes(b'ID3 fake mp3')
    return p


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine(['hello', 'world'])


@pytest.fixture
def fake_normalizer() -> FakeNormalizer:
    return FakeNormalizer()


@pytest.fixture
def fake_sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def session(fake_engine: FakeEngine) -> EngineSession:
    return EngineSession(fake_engine)


@pytest.fixture
def ready_session(session: EngineSession, model_file: Path) -> EngineSession:
    session.load_model(str(model_file))
    return session


@pytest.fixture
def use_case(
    ready_session: EngineSession,
    fake_normalizer: FakeNormalizer,
    fake_sink: FakeSink,
    isolated_tmp: Path,
) -> TranscribeUseCase:
    return TranscribeUseCase(
        session=ready_session,
        normalizer=fake_normalizer,
        decoder=WavDecoder(),
        sink=fake_sink,
        temp_dir=str(isolated_tmp),
    )


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = """\
model:
  path: "small.en"
transcoder:
  binary: "/opt/ffmpeg/bin/ffmpeg"
  timeout: 60
clipboard:
  enabled: false
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p
