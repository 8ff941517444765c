"""File-based debug logging setup."""

from __future__ import annotations

import logging
from pathlib import Path


def setup_file_logging(log_dir: Path, level: str = 'DEBUG') -> Path:
    """Configure file-based logging for the ``wsc`` logger tree into *log_dir*."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / 'wsc_debug.log'
    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
    root = logging.getLogger('wsc')
    root.setLevel(level.upper())
    root.addHandler(handler)
    logging.getLogger('wsc.cli').info('Debug logging started → %s', log_path)
    return log_path
