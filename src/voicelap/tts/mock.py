"""Mock speech output for testing."""

import math
import struct

from .speaker import SynthesisResult


class MockSpeaker:
    """Mock speaker that records what it was asked to say.

    Implements the Speaker protocol.
    """

    def __init__(self) -> None:
        self._spoken: list[tuple[str, float]] = []
        self._stop_count = 0
        self._error_message: str | None = None

    def speak(self, text: str, volume: float) -> None:
        """Record the utterance."""
        if self._error_message:
            raise RuntimeError(self._error_message)
        self._spoken.append((text, volume))

    def stop(self) -> None:
        """Record a stop request."""
        self._stop_count += 1

    def set_error(self, message: str | None) -> None:
        """Make subsequent speak() calls raise RuntimeError."""
        self._error_message = message

    @property
    def spoken(self) -> list[tuple[str, float]]:
        """All (text, volume) pairs spoken so far."""
        return self._spoken.copy()

    @property
    def spoken_texts(self) -> list[str]:
        """Texts spoken so far."""
        return [text for text, _ in self._spoken]

    @property
    def last_text(self) -> str | None:
        """Most recent utterance."""
        return self._spoken[-1][0] if self._spoken else None

    @property
    def stop_count(self) -> int:
        """Number of stop() calls."""
        return self._stop_count

    def clear(self) -> None:
        """Reset mock state."""
        self._spoken.clear()
        self._stop_count = 0
        self._error_message = None


class MockSynthesizer:
    """Mock synthesizer generating a tone proportional to text length.

    Implements the Synthesizer protocol.
    """

    def __init__(self, sample_rate: int = 22050) -> None:
        self._sample_rate = sample_rate
        self._synthesized_texts: list[str] = []

    def synthesize(self, text: str) -> SynthesisResult:
        """Generate roughly 100ms of 440Hz tone per word."""
        self._synthesized_texts.append(text)
        duration_ms = max(100, len(text.split()) * 100)
        num_samples = int(self._sample_rate * duration_ms / 1000)
        audio = b"".join(
            struct.pack(
                "<h", int(32767 * 0.3 * math.sin(2 * math.pi * 440 * i / self._sample_rate))
            )
            for i in range(num_samples)
        )
        return SynthesisResult(audio=audio, sample_rate=self._sample_rate, duration_ms=duration_ms)

    @property
    def synthesized_texts(self) -> list[str]:
        """Texts synthesized so far."""
        return self._synthesized_texts.copy()


__all__ = ["MockSpeaker", "MockSynthesizer"]
