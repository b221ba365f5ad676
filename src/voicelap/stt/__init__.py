"""Speech-to-text module for VoiceLap.

Provides continuous recognition with faster-whisper, a line-oriented text
recognizer for the console, and a mock for testing.
"""

from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from .mock import MockRecognizer
from .recognizer import (
    ErrorCallback,
    SpeechRecognizer,
    TranscriptCallback,
    extract_transcript,
)
from .text import TextStreamRecognizer

if TYPE_CHECKING:
    from ..config import AudioConfig, VoiceConfig


def create_recognizer(
    config: "VoiceConfig | None" = None,
    audio_config: "AudioConfig | None" = None,
    use_mock: bool = False,
    stream: TextIO | None = None,
) -> SpeechRecognizer:
    """Create a speech recognizer.

    Args:
        config: Voice configuration
        audio_config: Audio configuration for microphone capture
        use_mock: If True, return mock implementation for testing
        stream: If given, read transcripts line by line from this stream

    Returns:
        SpeechRecognizer implementation

    Raises:
        RuntimeError: If the configured engine is not available
    """
    engine = config.engine if config is not None else "whisper"

    if use_mock or engine == "mock":
        return MockRecognizer()

    if stream is not None or engine == "text":
        return TextStreamRecognizer(stream)

    if engine != "whisper":
        raise RuntimeError(f"Unknown speech engine: {engine}")

    from ..audio import create_audio_capture
    from .whisper import WhisperRecognizer

    capture = create_audio_capture(audio_config)
    if config is None:
        return WhisperRecognizer(capture=capture)
    return WhisperRecognizer(
        capture=capture,
        model_size=config.model,
        device=config.device,
        compute_type=config.compute_type,
        language=config.language,
        window_seconds=config.window_seconds,
        model_path=Path(config.model_path).expanduser() if config.model_path else None,
    )


__all__ = [
    "ErrorCallback",
    "MockRecognizer",
    "SpeechRecognizer",
    "TextStreamRecognizer",
    "TranscriptCallback",
    "create_recognizer",
    "extract_transcript",
]
