"""Persisted user settings.

Stores volume, announcement interval and the voice control switch as JSON.
Read once at startup and written on every change.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SETTINGS_VERSION = 1

# Choices offered by the --interval option; a settings file may hold any non-negative value.
INTERVAL_CHOICES = (10, 20, 30, 60)


def _get_settings_path() -> Path:
    """Get the default settings path.

    Returns:
        Path to ~/.voicelap/settings.json
    """
    return Path.home() / ".voicelap" / "settings.json"


@dataclass
class TimerSettings:
    """User-adjustable stopwatch settings.

    Attributes:
        volume: Speech output level from 0.0 to 1.0.
        interval_seconds: Seconds between elapsed-time announcements (0 = off).
        voice_control_enabled: Whether the recognizer should be listening.
    """

    volume: float = 1.0
    interval_seconds: int = 30
    voice_control_enabled: bool = True

    def __post_init__(self) -> None:
        self.volume = max(0.0, min(1.0, float(self.volume)))
        self.interval_seconds = max(0, int(self.interval_seconds))
        self.voice_control_enabled = bool(self.voice_control_enabled)


def load_settings(path: Path | None = None) -> TimerSettings:
    """Load settings from a JSON file.

    Args:
        path: Optional path to the settings file. Defaults to ~/.voicelap/settings.json

    Returns:
        TimerSettings with loaded values, or defaults if the file is missing or invalid.
    """
    if path is None:
        path = _get_settings_path()

    if not path.exists():
        logger.debug(f"Settings not found at {path}, using defaults")
        return TimerSettings()

    try:
        with open(path) as f:
            data = json.load(f)

        defaults = TimerSettings()
        return TimerSettings(
            volume=data.get("volume", defaults.volume),
            interval_seconds=data.get("interval_seconds", defaults.interval_seconds),
            voice_control_enabled=data.get(
                "voice_control_enabled", defaults.voice_control_enabled
            ),
        )

    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in settings: {e}")
        return TimerSettings()
    except (AttributeError, TypeError, ValueError) as e:
        logger.error(f"Invalid settings values: {e}")
        return TimerSettings()
    except OSError as e:
        logger.error(f"Failed to load settings: {e}")
        return TimerSettings()


def save_settings(settings: TimerSettings, path: Path | None = None) -> bool:
    """Save settings to a JSON file.

    Args:
        settings: Settings to save.
        path: Optional path to the settings file. Defaults to ~/.voicelap/settings.json

    Returns:
        True if saved successfully, False otherwise.
    """
    if path is None:
        path = _get_settings_path()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "version": SETTINGS_VERSION,
            "volume": settings.volume,
            "interval_seconds": settings.interval_seconds,
            "voice_control_enabled": settings.voice_control_enabled,
        }

        with open(path, "w") as f:
            json.dump(data, f, indent=2)

        logger.debug(f"Saved settings to {path}")
        return True

    except OSError as e:
        logger.error(f"Failed to save settings: {e}")
        return False


__all__ = [
    "INTERVAL_CHOICES",
    "TimerSettings",
    "load_settings",
    "save_settings",
]
