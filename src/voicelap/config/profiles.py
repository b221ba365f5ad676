"""Configuration profile and platform detection.

The profile comes from VOICELAP_PROFILE when set, otherwise from the host:
a Raspberry Pi runs the prod profile, everything else runs dev.
"""

import logging
import os
import platform
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

PROFILE_ENV_VAR = "VOICELAP_PROFILE"

# Files that identify a Raspberry Pi board, checked in order.
_PI_MODEL_FILES = (Path("/proc/device-tree/model"), Path("/proc/cpuinfo"))


class Profile(Enum):
    """Bundled configuration profiles (one YAML file each)."""

    DEV = "dev"
    PROD = "prod"
    TEST = "test"


class Platform(Enum):
    """Host platforms with distinct speech engines."""

    MACOS = "macos"
    LINUX = "linux"
    RASPBERRY_PI = "raspberrypi"
    UNKNOWN = "unknown"


def _is_raspberry_pi() -> bool:
    for model_file in _PI_MODEL_FILES:
        try:
            if "Raspberry Pi" in model_file.read_text(errors="ignore"):
                return True
        except OSError:
            continue
    return False


def detect_platform() -> Platform:
    """Identify the host platform. Never raises."""
    system = platform.system()
    if system == "Darwin":
        return Platform.MACOS
    if system == "Linux":
        return Platform.RASPBERRY_PI if _is_raspberry_pi() else Platform.LINUX
    return Platform.UNKNOWN


def detect_profile() -> Profile:
    """Pick the profile from the environment, falling back to the platform."""
    requested = os.environ.get(PROFILE_ENV_VAR, "").strip().lower()
    if requested:
        try:
            return Profile(requested)
        except ValueError:
            logger.warning(f"Ignoring unknown {PROFILE_ENV_VAR}={requested!r}")

    return Profile.PROD if detect_platform() == Platform.RASPBERRY_PI else Profile.DEV


def get_profile_path(profile: Profile | None = None, config_dir: Path | None = None) -> Path:
    """Path to a profile's YAML file (auto-detected profile if None)."""
    from .loader import default_config_dir

    profile = profile or detect_profile()
    return (config_dir or default_config_dir()) / f"{profile.value}.yaml"


__all__ = [
    "PROFILE_ENV_VAR",
    "Platform",
    "Profile",
    "detect_platform",
    "detect_profile",
    "get_profile_path",
]
