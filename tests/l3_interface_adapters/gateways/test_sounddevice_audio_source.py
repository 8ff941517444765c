"""Tests for SounddeviceAudioSource gateway — patches sd.InputStream."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import numpy as np

MODULE = 'whisper_scribe.l3_interface_adapters.gateways.sounddevice_audio_source'


class TestSounddeviceAudioSource:
    @patch(f'{MODULE}.sd.InputStream')
    def test_open_creates_mono_16k_float_stream(self, mock_stream_cls):
        from whisper_scribe.l3_interface_adapters.gateways.sounddevice_audio_source import SounddeviceAudioSource

        src = SounddeviceAudioSource()
        src.open()

        kwargs = mock_stream_cls.call_args.kwargs
        assert kwargs['samplerate'] == 16000
        assert kwargs['channels'] == 1
        assert kwargs['dtype'] == 'float32'
        mock_stream_cls.return_value.start.assert_called_once()

    @patch(f'{MODULE}.sd.InputStream')
    def test_callback_chunks_are_read_flat(self, mock_stream_cls):
        from whisper_scribe.l3_interface_adapters.gateways.sounddevice_audio_source import SounddeviceAudioSource

        src = SounddeviceAudioSource()
        src.open(16000, 1)
        callback = mock_stream_cls.call_args.kwargs['callback']
        callback(np.array([[0.1], [0.2]], dtype=np.float32), 2, None, None)

        chunk = src.read(timeout=0.1)

        assert chunk is not None
        assert chunk.shape == (2,)
        assert src.read(timeout=0.01) is None

    @patch(f'{MODULE}.sd.InputStream')
    def test_close_stops_stream_once(self, mock_stream_cls):
        from whisper_scribe.l3_interface_adapters.gateways.sounddevice_audio_source import SounddeviceAudioSource

        stream = MagicMock()
        mock_stream_cls.return_value = stream
        src = SounddeviceAudioSource()
        src.open()

        src.close()
        src.close()

        stream.stop.assert_called_once()
        stream.close.assert_called_once()
