"""Application defaults — lives in L4, not domain."""

from __future__ import annotations

import copy

from whisper_scribe.l1_entities.config import AppConfig
from whisper_scribe.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'model': {
        'path': 'base.en',
    },
    'transcoder': {
        'binary': 'ffmpeg',
        'timeout': 300.0,
    },
    'recording': {
        'suffix': '.webm',
    },
    'clipboard': {
        'enabled': True,
        'command': None,
    },
    'temp_dir': None,
    'log_level': 'INFO',
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)
