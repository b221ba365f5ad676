"""Audio capture protocol and data classes.

Defines the microphone interface used by speech recognizers.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol


@dataclass
class AudioChunk:
    """Raw audio data chunk.

    Attributes:
        data: Raw PCM audio bytes (16-bit)
        sample_rate: Sample rate in Hz
        channels: Number of audio channels
    """

    data: bytes
    sample_rate: int
    channels: int = 1

    @property
    def duration_ms(self) -> float:
        """Duration of this chunk in milliseconds."""
        if self.sample_rate == 0 or self.channels == 0:
            return 0.0
        frames = len(self.data) / (2 * self.channels)
        return frames / self.sample_rate * 1000


class AudioCapture(Protocol):
    """Interface for microphone capture."""

    def start(self) -> None:
        """Open the input device.

        Raises:
            PermissionError: If microphone access is denied
            RuntimeError: If capture cannot be started
        """
        ...

    def stop(self) -> None:
        """Close the input device. Safe to call when not capturing."""
        ...

    def read(self, frames: int) -> AudioChunk:
        """Read frames from the input buffer.

        Raises:
            RuntimeError: If not currently capturing
        """
        ...

    def stream(self) -> Iterator[AudioChunk]:
        """Yield chunks until capture stops. Blocking."""
        ...

    @property
    def is_active(self) -> bool:
        """Return True if capture is currently active."""
        ...

    @property
    def sample_rate(self) -> int:
        """Configured sample rate in Hz."""
        ...


__all__ = ["AudioCapture", "AudioChunk"]
