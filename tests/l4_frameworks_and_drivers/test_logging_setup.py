"""Tests for file logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

from whisper_scribe.l4_frameworks_and_drivers.logging_setup import setup_file_logging


def test_writes_wsc_records_to_file(tmp_path: Path):
    root = logging.getLogger('wsc')
    try:
        log_path = setup_file_logging(tmp_path / 'logs', 'info')
        logging.getLogger('wsc.session').info('Model ready: ggml-base.en.bin')
        for handler in root.handlers:
            handler.flush()

        text = log_path.read_text(encoding='utf-8')
        assert root.level == logging.INFO
        assert 'Debug logging started' in text
        assert 'wsc.session Model ready: ggml-base.en.bin' in text
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.NOTSET)
