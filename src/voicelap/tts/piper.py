"""Piper TTS synthesizer implementation.

Uses Piper for fast, offline text-to-speech on CPU.
"""

import logging
from pathlib import Path
from typing import Any

from .speaker import SynthesisResult

logger = logging.getLogger(__name__)

PIPER_AVAILABLE = False
try:
    import piper

    PIPER_AVAILABLE = True
except ImportError:
    pass


class PiperSynthesizer:
    """Text-to-speech synthesizer using a local Piper voice model."""

    def __init__(
        self,
        voice: str = "en_US-lessac-medium",
        speed: float = 1.0,
        models_dir: Path | None = None,
    ) -> None:
        """Initialize Piper synthesizer.

        Args:
            voice: Voice identifier (e.g., "en_US-lessac-medium")
            speed: Speech speed multiplier
            models_dir: Directory containing Piper voice models

        Raises:
            RuntimeError: If piper-tts or the voice model is not available
        """
        if not PIPER_AVAILABLE:
            raise RuntimeError("piper-tts not available. Install with: pip install piper-tts")

        self._voice_name = voice
        self._speed = max(0.5, min(2.0, speed))
        self._models_dir = models_dir or Path("models/piper")

        model_path = self._models_dir / f"{voice}.onnx"
        config_path = self._models_dir / f"{voice}.onnx.json"
        if not model_path.exists():
            raise RuntimeError(f"Piper model not found: {model_path}")

        self._voice: Any = piper.PiperVoice.load(str(model_path), str(config_path))
        logger.info(f"Piper initialized with voice: {voice}")

    def synthesize(self, text: str) -> SynthesisResult:
        """Synthesize text to 16-bit PCM.

        Raises:
            RuntimeError: If synthesis fails
        """
        try:
            sample_rate = self._voice.config.sample_rate
            audio = b"".join(chunk.audio_int16_bytes for chunk in self._voice.synthesize(text))
        except Exception as e:
            raise RuntimeError(f"Piper synthesis failed: {e}") from e

        if self._speed != 1.0:
            audio = self._adjust_speed(audio)

        duration_ms = int(len(audio) / (sample_rate * 2) * 1000)
        return SynthesisResult(audio=audio, sample_rate=sample_rate, duration_ms=duration_ms)

    def _adjust_speed(self, audio: bytes) -> bytes:
        """Change speed by resampling (pitch shifts with it)."""
        import numpy as np

        samples = np.frombuffer(audio, dtype=np.int16)
        new_length = int(len(samples) / self._speed)
        indices = np.linspace(0, len(samples) - 1, new_length).astype(int)
        return samples[indices].tobytes()

    @property
    def voice(self) -> str:
        """Get current voice."""
        return self._voice_name


__all__ = ["PIPER_AVAILABLE", "PiperSynthesizer"]
