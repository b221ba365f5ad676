"""Audio module for VoiceLap.

Provides microphone capture and speaker playback with a PyAudio backend
and mock implementations for testing.

Usage:
    capture = create_audio_capture(config.audio)
    playback = create_audio_playback(config.audio)
"""

from typing import TYPE_CHECKING

from .capture import AudioCapture, AudioChunk
from .playback import AudioPlayback, apply_volume

if TYPE_CHECKING:
    from ..config import AudioConfig


def create_audio_capture(
    config: "AudioConfig | None" = None,
    use_mock: bool = False,
) -> AudioCapture:
    """Create an audio capture instance.

    Args:
        config: Audio configuration (uses defaults if None)
        use_mock: If True, return mock implementation for testing

    Raises:
        RuntimeError: If PyAudio is not installed
    """
    device_name = "default"
    sample_rate = 16000
    channels = 1
    chunk_size = 1024

    if config is not None:
        device_name = config.input_device
        sample_rate = config.sample_rate
        channels = config.channels
        chunk_size = config.chunk_size

    if use_mock:
        from .mock import MockAudioCapture

        return MockAudioCapture(sample_rate=sample_rate, chunk_size=chunk_size)

    from .portaudio import PortAudioCapture

    return PortAudioCapture(
        device_name=device_name,
        sample_rate=sample_rate,
        channels=channels,
        chunk_size=chunk_size,
    )


def create_audio_playback(
    config: "AudioConfig | None" = None,
    use_mock: bool = False,
) -> AudioPlayback:
    """Create an audio playback instance.

    Args:
        config: Audio configuration (uses defaults if None)
        use_mock: If True, return mock implementation for testing

    Raises:
        RuntimeError: If PyAudio is not installed
    """
    if use_mock:
        from .mock import MockAudioPlayback

        return MockAudioPlayback()

    from .portaudio import PortAudioPlayback

    device_name = config.output_device if config is not None else "default"
    return PortAudioPlayback(device_name=device_name)


__all__ = [
    "AudioCapture",
    "AudioChunk",
    "AudioPlayback",
    "apply_volume",
    "create_audio_capture",
    "create_audio_playback",
]
