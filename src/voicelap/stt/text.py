"""Line-oriented recognizer.

Treats each line of a text stream as one transcript. Used by the console
runner to drive the stopwatch from a keyboard or a pipe.
"""

import logging
import sys
import threading
from typing import TextIO

from .recognizer import ErrorCallback, TranscriptCallback

logger = logging.getLogger(__name__)


class TextStreamRecognizer:
    """Reads transcripts from a text stream on a background thread.

    Implements the SpeechRecognizer protocol.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the recognizer.

        Args:
            stream: Source of lines; defaults to stdin
        """
        self._stream = stream or sys.stdin
        self._result_callback: TranscriptCallback | None = None
        self._error_callback: ErrorCallback | None = None
        self._listening = threading.Event()
        self._thread: threading.Thread | None = None

    def initialize(self) -> None:
        """Nothing to load."""

    def start(self) -> None:
        """Begin delivering lines."""
        self._listening.set()
        if self._thread is None or not self._thread.is_alive():
            self._thread = threading.Thread(target=self._read_loop, daemon=True)
            self._thread.start()

    def stop(self) -> None:
        """Stop delivering lines; unread lines stay in the stream."""
        self._listening.clear()

    def on_result(self, callback: TranscriptCallback) -> None:
        """Register the transcript callback."""
        self._result_callback = callback

    def on_error(self, callback: ErrorCallback) -> None:
        """Register the error callback."""
        self._error_callback = callback

    def _read_loop(self) -> None:
        try:
            for line in self._stream:
                self._listening.wait()
                if self._result_callback is not None:
                    self._result_callback(line.rstrip("\n"))
        except (OSError, ValueError) as e:
            logger.error(f"Transcript stream failed: {e}")
            if self._error_callback is not None:
                self._error_callback(e)
            return
        logger.debug("Transcript stream exhausted")


__all__ = ["TextStreamRecognizer"]
