"""Speaker and synthesizer protocols.

Defines the interfaces for fire-and-forget speech output.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class SynthesisResult:
    """Result of text-to-speech synthesis.

    Attributes:
        audio: Raw PCM audio bytes (16-bit, mono)
        sample_rate: Audio sample rate in Hz
        duration_ms: Audio duration in milliseconds
    """

    audio: bytes
    sample_rate: int
    duration_ms: int


class Synthesizer(Protocol):
    """Interface for engines that render text to PCM audio."""

    def synthesize(self, text: str) -> SynthesisResult:
        """Convert text to speech audio.

        Raises:
            RuntimeError: If synthesis fails
        """
        ...


class Speaker(Protocol):
    """Interface for speaking text aloud.

    Implementations return immediately; speech happens in the background
    and may overlap with earlier speech.
    """

    def speak(self, text: str, volume: float) -> None:
        """Speak text at the given volume.

        Args:
            text: Text to speak
            volume: Output level from 0.0 to 1.0
        """
        ...

    def stop(self) -> None:
        """Silence any speech in progress."""
        ...


__all__ = ["Speaker", "SynthesisResult", "Synthesizer"]
