"""PortAudio backend using PyAudio.

Provides AudioCapture and AudioPlayback implementations for macOS, Linux
and Raspberry Pi.
"""

import logging
import threading
from collections.abc import Iterator
from typing import Any

from .capture import AudioChunk

# PyAudio import with fallback for type hints
try:
    import pyaudio

    PYAUDIO_AVAILABLE = True
except ImportError:
    PYAUDIO_AVAILABLE = False
    pyaudio = None

logger = logging.getLogger(__name__)


def _require_pyaudio() -> None:
    if not PYAUDIO_AVAILABLE:
        raise RuntimeError("PyAudio not available. Install with: pip install pyaudio")


def _find_device(pa: Any, name: str, direction: str) -> int | None:
    """Find a device index by name substring; None selects the default."""
    if name == "default":
        return None
    key = "maxInputChannels" if direction == "input" else "maxOutputChannels"
    for i in range(pa.get_device_count()):
        info = pa.get_device_info_by_index(i)
        if name.lower() in info["name"].lower() and info[key] > 0:
            return i
    logger.warning(f"Audio {direction} device '{name}' not found, using default")
    return None


class PortAudioCapture:
    """Microphone capture through PyAudio.

    Implements the AudioCapture protocol.
    """

    def __init__(
        self,
        device_name: str = "default",
        sample_rate: int = 16000,
        channels: int = 1,
        chunk_size: int = 1024,
    ) -> None:
        """Initialize capture.

        Raises:
            RuntimeError: If PyAudio is not available
        """
        _require_pyaudio()
        self._device_name = device_name
        self._sample_rate = sample_rate
        self._channels = channels
        self._chunk_size = chunk_size
        self._pa: Any = None
        self._stream: Any = None
        self._is_active = False

    def start(self) -> None:
        """Open the input stream.

        Raises:
            PermissionError: If the input device cannot be opened
        """
        if self._is_active:
            return

        self._pa = pyaudio.PyAudio()
        try:
            self._stream = self._pa.open(
                format=pyaudio.paInt16,
                channels=self._channels,
                rate=self._sample_rate,
                input=True,
                input_device_index=_find_device(self._pa, self._device_name, "input"),
                frames_per_buffer=self._chunk_size,
            )
        except OSError as e:
            self._pa.terminate()
            self._pa = None
            raise PermissionError(f"Microphone unavailable: {e}") from e

        self._is_active = True

    def stop(self) -> None:
        """Close the input stream."""
        if not self._is_active:
            return

        self._is_active = False
        if self._stream is not None:
            self._stream.stop_stream()
            self._stream.close()
            self._stream = None
        if self._pa is not None:
            self._pa.terminate()
            self._pa = None

    def read(self, frames: int) -> AudioChunk:
        """Read frames from the input stream."""
        if not self._is_active or self._stream is None:
            raise RuntimeError("Capture not active")

        data = self._stream.read(frames, exception_on_overflow=False)
        return AudioChunk(data=data, sample_rate=self._sample_rate, channels=self._channels)

    def stream(self) -> Iterator[AudioChunk]:
        """Yield chunks until stopped."""
        if not self._is_active:
            self.start()
        while self._is_active:
            yield self.read(self._chunk_size)

    @property
    def is_active(self) -> bool:
        """Return True if capture is active."""
        return self._is_active

    @property
    def sample_rate(self) -> int:
        """Get sample rate."""
        return self._sample_rate


class PortAudioPlayback:
    """Speaker output through PyAudio.

    Implements the AudioPlayback protocol. Each play() call opens its own
    stream so overlapping announcements can play from separate threads.
    """

    def __init__(self, device_name: str = "default") -> None:
        """Initialize playback.

        Raises:
            RuntimeError: If PyAudio is not available
        """
        _require_pyaudio()
        self._device_name = device_name
        self._lock = threading.Lock()
        self._active_streams = 0
        self._stop_requested = threading.Event()

    def play(self, audio: bytes, sample_rate: int) -> None:
        """Play PCM audio, blocking until finished or stopped."""
        self._stop_requested.clear()
        pa = pyaudio.PyAudio()
        try:
            stream = pa.open(
                format=pyaudio.paInt16,
                channels=1,
                rate=sample_rate,
                output=True,
                output_device_index=_find_device(pa, self._device_name, "output"),
            )
            with self._lock:
                self._active_streams += 1
            try:
                block = 2048
                for offset in range(0, len(audio), block):
                    if self._stop_requested.is_set():
                        break
                    stream.write(audio[offset : offset + block])
            finally:
                with self._lock:
                    self._active_streams -= 1
                stream.stop_stream()
                stream.close()
        except OSError as e:
            raise RuntimeError(f"Audio playback failed: {e}") from e
        finally:
            pa.terminate()

    def stop(self) -> None:
        """Interrupt any playback in progress."""
        self._stop_requested.set()

    @property
    def is_playing(self) -> bool:
        """Return True if any stream is playing."""
        with self._lock:
            return self._active_streams > 0


__all__ = ["PYAUDIO_AVAILABLE", "PortAudioCapture", "PortAudioPlayback"]
