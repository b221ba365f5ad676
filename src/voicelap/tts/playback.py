"""Speaker built from a synthesizer and an audio output device."""

import logging
import threading
from typing import TYPE_CHECKING

from ..audio.playback import apply_volume

if TYPE_CHECKING:
    from ..audio.playback import AudioPlayback
    from .speaker import Synthesizer

logger = logging.getLogger(__name__)


class SynthesizerSpeaker:
    """Synthesizes text and plays it on a background thread.

    speak() returns immediately. Each utterance gets its own daemon thread,
    so announcements may overlap.
    """

    def __init__(self, synthesizer: "Synthesizer", playback: "AudioPlayback") -> None:
        """Initialize the speaker.

        Args:
            synthesizer: Engine rendering text to PCM
            playback: Output device
        """
        self._synthesizer = synthesizer
        self._playback = playback
        self._threads: list[threading.Thread] = []

    def speak(self, text: str, volume: float) -> None:
        """Start speaking text in the background."""
        thread = threading.Thread(target=self._speak_blocking, args=(text, volume), daemon=True)
        self._threads = [t for t in self._threads if t.is_alive()]
        self._threads.append(thread)
        thread.start()

    def _speak_blocking(self, text: str, volume: float) -> None:
        try:
            result = self._synthesizer.synthesize(text)
            self._playback.play(apply_volume(result.audio, volume), result.sample_rate)
        except Exception as e:
            logger.warning(f"Failed to speak '{text}': {e}")

    def stop(self) -> None:
        """Stop current playback."""
        self._playback.stop()

    def wait(self, timeout: float | None = None) -> None:
        """Block until pending utterances finish (for tests and shutdown)."""
        for thread in list(self._threads):
            thread.join(timeout=timeout)


__all__ = ["SynthesizerSpeaker"]
