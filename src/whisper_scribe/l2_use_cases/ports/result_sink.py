"""Port: one-way delivery of a finished transcript."""

from __future__ import annotations

from typing import Protocol


class ResultSink(Protocol):
    def publish(self, text: str) -> None:
        """Deliver *text*. Raises SinkFailureError on failure."""
        ...
