"""Voice control module for VoiceLap.

Manages the speech recognizer lifecycle: initialization with timeout,
permission failures, single-shot restart and serialized delivery.
"""

from .service import (
    DEFAULT_INIT_TIMEOUT_SECONDS,
    DEFAULT_RESTART_BACKOFF_SECONDS,
    VoiceControlService,
    VoiceStatus,
)

__all__ = [
    "DEFAULT_INIT_TIMEOUT_SECONDS",
    "DEFAULT_RESTART_BACKOFF_SECONDS",
    "VoiceControlService",
    "VoiceStatus",
]
