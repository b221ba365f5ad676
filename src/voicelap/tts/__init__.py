"""Text-to-speech module for VoiceLap.

Provides platform-adaptive, fire-and-forget speech output:
- macOS: native `say` command
- Raspberry Pi / Linux: Piper voice played through PyAudio
- Tests: MockSpeaker
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .feedback import SpokenFeedback
from .mock import MockSpeaker, MockSynthesizer
from .speaker import Speaker, SynthesisResult, Synthesizer

if TYPE_CHECKING:
    from ..config import AudioConfig, TTSConfig

logger = logging.getLogger(__name__)


def _create_macos_speaker(voice: str, speed: float) -> Speaker | None:
    from .macos import MacOSSpeaker

    # Piper voice ids do not exist on macOS
    speaker = MacOSSpeaker(voice="Samantha" if voice.startswith("en_") else voice, speed=speed)
    if speaker.is_available:
        logger.info("TTS: Using MacOSSpeaker (native macOS TTS)")
        return speaker
    logger.warning("TTS: macOS say command not available")
    return None


def _create_piper_speaker(
    tts_config: "TTSConfig | None",
    audio_config: "AudioConfig | None",
) -> Speaker | None:
    from ..audio import create_audio_playback
    from .piper import PiperSynthesizer
    from .playback import SynthesizerSpeaker

    voice = "en_US-lessac-medium"
    speed = 1.0
    models_dir = Path("models/piper")
    if tts_config is not None:
        voice = tts_config.voice
        speed = tts_config.speed
        models_dir = Path(tts_config.models_dir).expanduser()

    try:
        synthesizer = PiperSynthesizer(voice=voice, speed=speed, models_dir=models_dir)
        playback = create_audio_playback(audio_config)
    except RuntimeError as e:
        logger.warning(f"TTS: Piper unavailable: {e}")
        return None

    logger.info("TTS: Using Piper with PyAudio playback")
    return SynthesizerSpeaker(synthesizer, playback)


def create_speaker(
    config: "TTSConfig | None" = None,
    audio_config: "AudioConfig | None" = None,
    use_mock: bool = False,
) -> Speaker | None:
    """Create the speech output engine for the current platform.

    Args:
        config: TTS configuration (optional)
        audio_config: Audio configuration for Piper playback (optional)
        use_mock: If True, force MockSpeaker for testing

    Returns:
        A Speaker, or None if no engine is usable (announcements are then
        logged only).
    """
    from ..config.profiles import Platform, detect_platform

    engine = config.engine if config is not None else "auto"
    speed = config.speed if config is not None else 1.0
    voice = config.voice if config is not None else "Samantha"

    if use_mock or engine == "mock":
        logger.info("TTS: Using MockSpeaker (requested)")
        return MockSpeaker()

    if engine == "say":
        return _create_macos_speaker(voice, speed)
    if engine == "piper":
        return _create_piper_speaker(config, audio_config)

    platform = detect_platform()
    logger.debug(f"TTS: Detected platform: {platform.name}")

    if platform == Platform.MACOS:
        speaker = _create_macos_speaker(voice, speed)
        if speaker is not None:
            return speaker

    speaker = _create_piper_speaker(config, audio_config)
    if speaker is None:
        logger.warning("TTS: No speech engine available, announcements will only be logged")
    return speaker


__all__ = [
    "MockSpeaker",
    "MockSynthesizer",
    "Speaker",
    "SpokenFeedback",
    "SynthesisResult",
    "Synthesizer",
    "create_speaker",
]
