"""YAML configuration loader.

A profile file may name a parent with `extends: <file>`; the parent is
loaded first and the child's keys are merged over it, recursively for
nested sections. All settings live under a top-level `voicelap:` key.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from . import (
    AudioConfig,
    LoggingConfig,
    SettingsConfig,
    StopwatchConfig,
    TTSConfig,
    VoiceConfig,
    VoiceLapConfig,
)

logger = logging.getLogger(__name__)

ROOT_KEY = "voicelap"

_SECTIONS: dict[str, type] = {
    "stopwatch": StopwatchConfig,
    "voice": VoiceConfig,
    "audio": AudioConfig,
    "tts": TTSConfig,
    "logging": LoggingConfig,
    "settings": SettingsConfig,
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; nested dicts merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_yaml_with_inheritance(path: Path, _seen: frozenset[Path] = frozenset()) -> dict[str, Any]:
    """Load a YAML file, resolving its `extends` chain.

    Raises:
        FileNotFoundError: If the file or a parent is missing
        ValueError: If the extends chain loops or the file is not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    resolved = path.resolve()
    if resolved in _seen:
        raise ValueError(f"Config inheritance loop at {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    parent = data.pop("extends", None)
    if parent is None:
        return data

    logger.debug(f"{path.name} extends {parent}")
    base = load_yaml_with_inheritance(path.parent / parent, _seen | {resolved})
    return deep_merge(base, data)


def dict_to_config(data: dict[str, Any]) -> VoiceLapConfig:
    """Build a typed VoiceLapConfig from merged YAML data.

    Missing or empty sections take their defaults. Unknown keys inside a
    section raise TypeError from the dataclass constructor.
    """
    root = data.get(ROOT_KEY) or {}

    unknown = set(root) - set(_SECTIONS)
    if unknown:
        logger.warning(f"Ignoring unknown config sections: {', '.join(sorted(unknown))}")

    sections = {name: cls(**(root.get(name) or {})) for name, cls in _SECTIONS.items()}
    return VoiceLapConfig(**sections)


def default_config_dir() -> Path:
    """The config/ directory at the project root."""
    return Path(__file__).resolve().parents[3] / "config"


class YAMLConfigLoader:
    """Loads VoiceLapConfig from profile files in a config directory."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the loader.

        Args:
            config_dir: Directory holding <profile>.yaml files.
                        Defaults to config/ at the project root.
        """
        self._config_dir = config_dir or default_config_dir()

    def load(self, path: Path) -> VoiceLapConfig:
        """Load configuration from a file path."""
        return dict_to_config(load_yaml_with_inheritance(path))

    def load_profile(self, profile: str) -> VoiceLapConfig:
        """Load configuration by profile name (dev, prod, test)."""
        return self.load(self._config_dir / f"{profile}.yaml")

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        return self._config_dir


def load_config(path: str | Path | None = None, profile: str | None = None) -> VoiceLapConfig:
    """Load VoiceLap configuration.

    Args:
        path: Direct path to a config file (takes precedence)
        profile: Profile name if no path is given; defaults to "dev"

    Examples:
        >>> config = load_config(profile="test")
        >>> config = load_config(path="/etc/voicelap/custom.yaml")
    """
    loader = YAMLConfigLoader()
    if path is not None:
        return loader.load(Path(path))
    return loader.load_profile(profile or "dev")


def get_settings_path(config: VoiceLapConfig) -> Path:
    """Resolve the persisted settings path from config."""
    return Path(config.settings.path).expanduser()


__all__ = [
    "ROOT_KEY",
    "YAMLConfigLoader",
    "deep_merge",
    "default_config_dir",
    "dict_to_config",
    "get_settings_path",
    "load_config",
    "load_yaml_with_inheritance",
]
