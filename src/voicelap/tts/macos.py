"""macOS speech output using the native `say` command."""

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)


class MacOSSpeaker:
    """Speaks through `say`, one process per utterance.

    Volume is passed as an embedded `[[volm v]]` speech command, so no
    audio passes through Python.
    """

    # say uses words per minute; 175 is the system default rate
    BASE_RATE_WPM = 175

    def __init__(self, voice: str = "Samantha", speed: float = 1.0) -> None:
        """Initialize macOS speaker.

        Args:
            voice: Voice name (default: "Samantha")
            speed: Speech speed multiplier (default: 1.0)
        """
        self._voice = voice
        self._speed = max(0.5, min(2.0, speed))
        self._say_path = shutil.which("say")
        self._processes: list[subprocess.Popen] = []

    @property
    def is_available(self) -> bool:
        """Check if the `say` command is available."""
        return self._say_path is not None

    def build_command(self, text: str, volume: float) -> list[str]:
        """Build the `say` argument list for an utterance."""
        volume = max(0.0, min(1.0, volume))
        rate = int(self.BASE_RATE_WPM * self._speed)
        return [
            self._say_path or "say",
            "-v",
            self._voice,
            "-r",
            str(rate),
            f"[[volm {volume:.2f}]] {text}",
        ]

    def speak(self, text: str, volume: float) -> None:
        """Start speaking without waiting for completion.

        Raises:
            RuntimeError: If `say` is not available or cannot be started
        """
        if not self.is_available:
            raise RuntimeError("macOS TTS not available: say command not found")

        self._processes = [p for p in self._processes if p.poll() is None]
        try:
            process = subprocess.Popen(
                self.build_command(text, volume),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise RuntimeError(f"macOS TTS failed to start: {e}") from e
        self._processes.append(process)
        logger.debug(f"say started for '{text[:30]}' (pid={process.pid})")

    def stop(self) -> None:
        """Terminate any utterances still speaking."""
        for process in self._processes:
            if process.poll() is None:
                process.terminate()
        self._processes.clear()


__all__ = ["MacOSSpeaker"]
