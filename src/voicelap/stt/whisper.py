"""Faster-whisper recognizer implementation.

Captures microphone audio in fixed windows and transcribes each window
with faster-whisper (CTranslate2).
"""

import logging
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from .recognizer import ErrorCallback, TranscriptCallback

if TYPE_CHECKING:
    from ..audio.capture import AudioCapture

# faster-whisper import with fallback
try:
    from faster_whisper import WhisperModel

    FASTER_WHISPER_AVAILABLE = True
except ImportError:
    FASTER_WHISPER_AVAILABLE = False
    WhisperModel = None  # type: ignore

logger = logging.getLogger(__name__)

WHISPER_SAMPLE_RATE = 16000


class WhisperRecognizer:
    """Continuous speech recognizer using faster-whisper.

    Faster-whisper has no true streaming mode, so audio is buffered into
    windows of `window_seconds` and each window is transcribed on the
    listening thread.
    """

    def __init__(
        self,
        capture: "AudioCapture",
        model_size: str = "tiny.en",
        device: str = "cpu",
        compute_type: str = "int8",
        language: str = "en",
        window_seconds: float = 2.0,
        model_path: Path | None = None,
    ) -> None:
        """Initialize Whisper recognizer.

        Args:
            capture: Microphone source
            model_size: Whisper model size (tiny.en, base.en, ...)
            device: Device to run on ("cpu", "cuda", "auto")
            compute_type: Computation type ("int8", "float16", "float32")
            language: Expected language code
            window_seconds: Seconds of audio per transcription
            model_path: Optional path to a pre-downloaded model

        Raises:
            RuntimeError: If faster-whisper is not available
        """
        if not FASTER_WHISPER_AVAILABLE:
            raise RuntimeError(
                "faster-whisper not available. Install with: pip install faster-whisper"
            )

        self._capture = capture
        self._model_size = model_size
        self._device = device
        self._compute_type = compute_type
        self._language = language
        self._window_seconds = window_seconds
        self._model_path = model_path
        self._model: Any = None

        self._result_callback: TranscriptCallback | None = None
        self._error_callback: ErrorCallback | None = None
        self._listening = False
        self._thread: threading.Thread | None = None

    def initialize(self) -> None:
        """Load the Whisper model (may download it on first use)."""
        if self._model is not None:
            return

        logger.info(
            f"Loading Whisper model: {self._model_size} "
            f"(device={self._device}, compute={self._compute_type})"
        )
        start = time.time()

        source = self._model_size
        if self._model_path and self._model_path.exists():
            source = str(self._model_path)
        try:
            self._model = WhisperModel(
                source, device=self._device, compute_type=self._compute_type
            )
        except Exception as e:
            raise RuntimeError(f"Failed to load Whisper model: {e}") from e

        logger.info(f"Whisper model loaded in {(time.time() - start) * 1000:.0f}ms")

    def start(self) -> None:
        """Open the microphone and begin transcribing."""
        if self._model is None:
            raise RuntimeError("Recognizer not initialized")
        if self._listening:
            return

        self._capture.start()
        self._listening = True
        self._thread = threading.Thread(target=self._listen_loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop transcribing and close the microphone."""
        self._listening = False
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=self._window_seconds + 1.0)
        self._thread = None
        self._capture.stop()

    def on_result(self, callback: TranscriptCallback) -> None:
        """Register the transcript callback."""
        self._result_callback = callback

    def on_error(self, callback: ErrorCallback) -> None:
        """Register the error callback."""
        self._error_callback = callback

    def transcribe(self, audio: bytes, sample_rate: int) -> str:
        """Transcribe one window of 16-bit PCM audio to text."""
        audio_array = np.frombuffer(audio, dtype=np.int16).astype(np.float32) / 32768.0

        if sample_rate != WHISPER_SAMPLE_RATE:
            ratio = WHISPER_SAMPLE_RATE / sample_rate
            indices = np.linspace(0, len(audio_array) - 1, int(len(audio_array) * ratio))
            audio_array = audio_array[indices.astype(int)]

        segments, _info = self._model.transcribe(
            audio_array,
            language=self._language,
            beam_size=1,
            vad_filter=True,
        )
        return " ".join(segment.text.strip() for segment in segments).strip()

    def _listen_loop(self) -> None:
        sample_rate = self._capture.sample_rate
        window_bytes = int(sample_rate * self._window_seconds) * 2
        buffer = b""

        try:
            for chunk in self._capture.stream():
                if not self._listening:
                    break
                buffer += chunk.data
                if len(buffer) < window_bytes:
                    continue

                text = self.transcribe(buffer, sample_rate)
                buffer = b""
                if text and self._result_callback is not None:
                    logger.debug(f"Whisper heard: '{text}'")
                    self._result_callback(text)
        except Exception as e:
            logger.error(f"Speech recognition failed: {e}")
            self._listening = False
            if self._error_callback is not None:
                self._error_callback(e)

    @property
    def is_loaded(self) -> bool:
        """Check if model is loaded."""
        return self._model is not None


__all__ = ["FASTER_WHISPER_AVAILABLE", "WhisperRecognizer"]
