"""Port: model name -> ggml file path."""

from __future__ import annotations

from typing import Protocol


class ModelResolver(Protocol):
    """Turns a whisper.cpp model name (``base.en``) or a path into a file the session can load.

    Unknown names are returned unchanged so the session reports them as missing.
    """

    def resolve(self, model_name: str) -> str: ...
