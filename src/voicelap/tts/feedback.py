"""Spoken feedback for stopwatch events.

Wraps a Speaker with the user's volume so callers only supply text.
"""

import logging

from .speaker import Speaker

logger = logging.getLogger(__name__)


class SpokenFeedback:
    """Speaks confirmations and announcements at the configured volume.

    Speech failures are logged and never propagate to the caller.
    """

    def __init__(self, speaker: Speaker | None = None, volume: float = 1.0) -> None:
        """Initialize spoken feedback.

        Args:
            speaker: Output engine, or None to stay silent
            volume: Output level from 0.0 to 1.0
        """
        self._speaker = speaker
        self._volume = 1.0
        self.volume = volume

    def say(self, text: str) -> None:
        """Speak text without waiting for it to finish."""
        logger.info(f"Speaking: {text}")
        if self._speaker is None:
            return
        try:
            self._speaker.speak(text, self._volume)
        except Exception as e:
            logger.warning(f"Speech output failed: {e}")

    def stop(self) -> None:
        """Silence any speech in progress."""
        if self._speaker is None:
            return
        try:
            self._speaker.stop()
        except Exception as e:
            logger.warning(f"Failed to stop speech output: {e}")

    @property
    def volume(self) -> float:
        """Current output level."""
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = max(0.0, min(1.0, float(value)))


__all__ = ["SpokenFeedback"]
