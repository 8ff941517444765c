"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel


class ModelConfig(BaseModel):
    path: str  # file path or known whisper.cpp model name


class TranscoderConfig(BaseModel):
    binary: str
    timeout: float


class RecordingConfig(BaseModel):
    suffix: str


class ClipboardConfig(BaseModel):
    enabled: bool
    command: list[str] | None = None  # None → platform default


class AppConfig(BaseModel):
    model: ModelConfig
    transcoder: TranscoderConfig
    recording: RecordingConfig
    clipboard: ClipboardConfig
    temp_dir: str | None = None
    log_level: str = 'INFO'
