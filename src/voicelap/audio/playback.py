"""Audio playback protocol and volume scaling."""

from typing import Protocol

import numpy as np


class AudioPlayback(Protocol):
    """Interface for speaker output."""

    def play(self, audio: bytes, sample_rate: int) -> None:
        """Play 16-bit mono PCM, blocking until finished.

        Raises:
            RuntimeError: If playback fails
        """
        ...

    def stop(self) -> None:
        """Stop current playback. Safe to call when idle."""
        ...

    @property
    def is_playing(self) -> bool:
        """Return True if audio is currently playing."""
        ...


def apply_volume(audio: bytes, volume: float) -> bytes:
    """Scale 16-bit PCM samples by a volume factor.

    Args:
        audio: Raw PCM audio bytes (16-bit)
        volume: Level from 0.0 (silent) to 1.0 (unchanged)

    Returns:
        Scaled PCM bytes of the same length.
    """
    volume = max(0.0, min(1.0, volume))
    if volume >= 1.0 or not audio:
        return audio

    samples = np.frombuffer(audio, dtype=np.int16).astype(np.float32)
    scaled = np.clip(samples * volume, -32768, 32767).astype(np.int16)
    return scaled.tobytes()


__all__ = ["AudioPlayback", "apply_volume"]
