"""Tests for application defaults and config building."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from whisper_scribe.l4_frameworks_and_drivers.infra_config import APP_CONFIG_DEFAULTS, build_app_config


class TestBuildAppConfig:
    def test_defaults(self):
        config = build_app_config({})
        assert config.model.path == 'base.en'
        assert config.transcoder.binary == 'ffmpeg'
        assert config.transcoder.timeout == 300.0
        assert config.recording.suffix == '.webm'
        assert config.clipboard.enabled is True
        assert config.clipboard.command is None
        assert config.temp_dir is None

    def test_overrides_merge_into_defaults(self):
        config = build_app_config({'transcoder': {'timeout': 30}, 'clipboard': {'command': ['xsel', '-ib']}})
        assert config.transcoder.timeout == 30.0
        assert config.transcoder.binary == 'ffmpeg'
        assert config.clipboard.command == ['xsel', '-ib']
        assert config.clipboard.enabled is True

    def test_defaults_not_mutated(self):
        build_app_config({'model': {'path': '/tmp/m.bin'}})
        assert APP_CONFIG_DEFAULTS['model']['path'] == 'base.en'

    def test_invalid_value_raises(self):
        with pytest.raises(ValidationError):
            build_app_config({'clipboard': {'enabled': 'sometimes'}})
