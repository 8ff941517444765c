"""Tests for transcript entities."""

from whisper_scribe.l1_entities.cancel_token import CancelToken
from whisper_scribe.l1_entities.transcript import Segment, TranscriptResult


class TestTranscriptResult:
    def test_defaults(self):
        result = TranscriptResult(text='hi')
        assert result.segments == []
        assert result.published is False
        assert result.publish_error is None

    def test_segment_timestamps_default_to_zero(self):
        seg = Segment(text='hello')
        assert (seg.start, seg.end) == (0.0, 0.0)


class TestCancelToken:
    def test_starts_uncancelled(self):
        assert CancelToken().cancelled is False

    def test_cancel_is_sticky(self):
        token = CancelToken()
        token.cancel()
        token.cancel()
        assert token.cancelled is True
