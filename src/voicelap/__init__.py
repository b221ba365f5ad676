"""VoiceLap - Voice-controlled stopwatch.

VoiceLap provides a hands-free stopwatch with:
- Spoken commands (start, stop, lap, reset and synonyms)
- Speech-to-text (faster-whisper)
- Spoken confirmations and periodic time announcements (Piper / macOS say)

Usage:
    python -m voicelap --profile dev
    python -m voicelap --typed
"""

__version__ = "0.1.0"
__author__ = "MPS Inc"

from .config import VoiceLapConfig
from .config.loader import load_config
from .session import StopwatchSession

__all__ = [
    "StopwatchSession",
    "VoiceLapConfig",
    "__version__",
    "load_config",
]
