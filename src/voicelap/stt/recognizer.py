"""Speech recognizer protocol and payload decoding.

Defines the interface every speech engine adapter implements.
"""

import json
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

TranscriptCallback = Callable[[str], None]
ErrorCallback = Callable[[Exception], None]


class SpeechRecognizer(Protocol):
    """Interface for continuous speech recognition.

    Adapters push transcripts through the result callback from whatever
    thread the engine runs on.
    """

    def initialize(self) -> None:
        """Load models and prepare the engine.

        Raises:
            RuntimeError: If the engine cannot be initialized
        """
        ...

    def start(self) -> None:
        """Begin listening.

        Raises:
            PermissionError: If microphone access is denied
            RuntimeError: If the engine is not initialized
        """
        ...

    def stop(self) -> None:
        """Stop listening. Safe to call when not listening."""
        ...

    def on_result(self, callback: TranscriptCallback) -> None:
        """Register the transcript callback."""
        ...

    def on_error(self, callback: ErrorCallback) -> None:
        """Register the callback for errors raised while listening."""
        ...


def extract_transcript(payload: object) -> str | None:
    """Decode a recognizer payload into transcript text.

    Accepts plain text or engine JSON such as ``{"text": "start"}``.

    Returns:
        The transcript, or None if the payload is malformed or carries no text.
    """
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Discarding undecodable recognizer payload")
            return None

    if not isinstance(payload, str):
        logger.debug(f"Discarding recognizer payload of type {type(payload).__name__}")
        return None

    stripped = payload.strip()
    if not stripped.startswith("{"):
        return payload

    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        logger.debug(f"Discarding malformed recognizer payload: {stripped[:50]}")
        return None

    text = data.get("text") if isinstance(data, dict) else None
    if not isinstance(text, str):
        logger.debug(f"Recognizer payload has no text: {stripped[:50]}")
        return None
    return text


__all__ = ["ErrorCallback", "SpeechRecognizer", "TranscriptCallback", "extract_transcript"]
