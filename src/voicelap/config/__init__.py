"""Configuration module for VoiceLap.

This module provides configuration loading, profile management and the
persisted user settings.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .settings import TimerSettings, load_settings, save_settings


@dataclass
class StopwatchConfig:
    """Stopwatch refresh configuration."""

    tick_interval_ms: int = 50


@dataclass
class VoiceConfig:
    """Speech recognition configuration."""

    engine: str = "whisper"
    model: str = "tiny.en"
    device: str = "cpu"
    compute_type: str = "int8"
    language: str = "en"
    window_seconds: float = 2.0
    init_timeout_seconds: float = 60.0
    restart_backoff_seconds: float = 2.0
    model_path: str | None = None


@dataclass
class AudioConfig:
    """Audio input/output configuration."""

    input_device: str = "default"
    output_device: str = "default"
    sample_rate: int = 16000
    channels: int = 1
    chunk_size: int = 1024


@dataclass
class TTSConfig:
    """Text-to-speech configuration."""

    engine: str = "auto"
    voice: str = "en_US-lessac-medium"
    speed: float = 1.0
    models_dir: str = "models/piper"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class SettingsConfig:
    """Location of the persisted user settings."""

    path: str = "~/.voicelap/settings.json"


@dataclass
class VoiceLapConfig:
    """Main VoiceLap configuration."""

    stopwatch: StopwatchConfig = field(default_factory=StopwatchConfig)
    voice: VoiceConfig = field(default_factory=VoiceConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    tts: TTSConfig = field(default_factory=TTSConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    settings: SettingsConfig = field(default_factory=SettingsConfig)


class ConfigLoader(Protocol):
    """Protocol for configuration loading."""

    def load(self, path: Path) -> VoiceLapConfig:
        """Load configuration from file path."""
        ...

    def load_profile(self, profile: str) -> VoiceLapConfig:
        """Load configuration by profile name (dev, prod, test)."""
        ...

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        ...


# Public API
__all__ = [
    "AudioConfig",
    "ConfigLoader",
    "LoggingConfig",
    "SettingsConfig",
    "StopwatchConfig",
    "TTSConfig",
    "TimerSettings",
    "VoiceConfig",
    "VoiceLapConfig",
    "load_settings",
    "save_settings",
]
