"""Canonical waveform parameters required by the engine."""

SAMPLE_RATE = 16000
CHANNELS = 1
SAMPLE_WIDTH = 2  # bytes, signed 16-bit little-endian
PCM_SCALE = 32768.0
