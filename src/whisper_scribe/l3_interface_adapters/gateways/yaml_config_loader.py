"""Gateway: YAML configuration reader — finds the user's config file and returns its raw data."""

from __future__ import annotations

from pathlib import Path

import yaml

from whisper_scribe.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATHS


class YamlConfigLoader:
    """Reads an explicit config file, or the first default location that exists.

    Validation and defaults live in ``infra_config.build_app_config``.
    """

    def load_raw(self, config_path: str | None = None) -> dict:
        if config_path is not None:
            path = Path(config_path)
            if not path.exists():
                raise FileNotFoundError(f'Config file not found: {path}')
            return _read(path)
        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return _read(default_path)
        return {}


def _read(path: Path) -> dict:
    data = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
    if not isinstance(data, dict):
        raise ValueError(f'Config file {path} must contain a mapping, got {type(data).__name__}')
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
