"""Mock recognizer for testing.

Lets tests push transcripts and errors as if a speech engine produced them.
"""

import time

from .recognizer import ErrorCallback, TranscriptCallback


class MockRecognizer:
    """Controllable speech recognizer.

    Implements the SpeechRecognizer protocol.
    """

    def __init__(self) -> None:
        """Initialize mock recognizer."""
        self._result_callback: TranscriptCallback | None = None
        self._error_callback: ErrorCallback | None = None
        self._initialized = False
        self._listening = False
        self._init_error: Exception | None = None
        self._init_delay_s = 0.0
        self._start_error: Exception | None = None
        self._initialize_count = 0
        self._start_count = 0
        self._stop_count = 0

    def set_init_error(self, error: Exception | None) -> None:
        """Make initialize() raise the given error."""
        self._init_error = error

    def set_init_delay(self, seconds: float) -> None:
        """Make initialize() block, to exercise timeouts."""
        self._init_delay_s = seconds

    def set_start_error(self, error: Exception | None) -> None:
        """Make start() raise the given error (e.g. PermissionError)."""
        self._start_error = error

    def initialize(self) -> None:
        """Simulate model loading."""
        self._initialize_count += 1
        if self._init_delay_s:
            time.sleep(self._init_delay_s)
        if self._init_error is not None:
            raise self._init_error
        self._initialized = True

    def start(self) -> None:
        """Simulate opening the microphone."""
        self._start_count += 1
        if self._start_error is not None:
            raise self._start_error
        if not self._initialized:
            raise RuntimeError("Recognizer not initialized")
        self._listening = True

    def stop(self) -> None:
        """Simulate closing the microphone."""
        self._stop_count += 1
        self._listening = False

    def on_result(self, callback: TranscriptCallback) -> None:
        """Register the transcript callback."""
        self._result_callback = callback

    def on_error(self, callback: ErrorCallback) -> None:
        """Register the error callback."""
        self._error_callback = callback

    def emit(self, payload: str) -> None:
        """Deliver a transcript (or raw engine payload) while listening."""
        if self._listening and self._result_callback is not None:
            self._result_callback(payload)

    def fail(self, error: Exception) -> None:
        """Report a runtime engine error and stop listening."""
        self._listening = False
        if self._error_callback is not None:
            self._error_callback(error)

    @property
    def is_listening(self) -> bool:
        """Whether start() succeeded and stop() has not been called."""
        return self._listening

    @property
    def initialize_count(self) -> int:
        """Number of initialize() calls."""
        return self._initialize_count

    @property
    def start_count(self) -> int:
        """Number of start() calls."""
        return self._start_count

    @property
    def stop_count(self) -> int:
        """Number of stop() calls."""
        return self._stop_count


__all__ = ["MockRecognizer"]
