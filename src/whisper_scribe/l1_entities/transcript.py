"""Transcript entities."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Segment(BaseModel):
    """One span of recognized text, in engine emission order."""

    text: str
    start: float = Field(default=0.0, description='Offset in seconds from the start of the buffer')
    end: float = Field(default=0.0, description='Offset in seconds from the start of the buffer')


class TranscriptResult(BaseModel):
    """Trimmed, space-joined text of one transcription call."""

    text: str
    segments: list[Segment] = Field(default_factory=list)
    published: bool = False
    publish_error: str | None = None
