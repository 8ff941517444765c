"""whisper-scribe: local whisper.cpp transcription of files, recordings and raw samples."""

__version__ = '0.1.0'
