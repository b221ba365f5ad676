"""Mock audio devices for testing.

Capture plays back preset PCM (or silence); playback records what it was
asked to play.
"""

from collections.abc import Iterator

from .capture import AudioChunk


class MockAudioCapture:
    """Mock microphone.

    Implements the AudioCapture protocol.
    """

    def __init__(self, sample_rate: int = 16000, chunk_size: int = 1024) -> None:
        self._sample_rate = sample_rate
        self._chunk_size = chunk_size
        self._is_active = False
        self._audio_source: bytes = b""
        self._position = 0
        self._permission_denied = False

    def set_audio_data(self, data: bytes) -> None:
        """Set raw PCM to serve from read()."""
        self._audio_source = data
        self._position = 0

    def deny_permission(self, denied: bool = True) -> None:
        """Make start() fail as if microphone access were refused."""
        self._permission_denied = denied

    def start(self) -> None:
        """Start mock capture."""
        if self._permission_denied:
            raise PermissionError("Microphone permission denied")
        self._is_active = True
        self._position = 0

    def stop(self) -> None:
        """Stop mock capture."""
        self._is_active = False

    def read(self, frames: int) -> AudioChunk:
        """Read frames from the preset audio, padding with silence."""
        if not self._is_active:
            raise RuntimeError("Capture not active")

        needed = frames * 2
        data = self._audio_source[self._position : self._position + needed]
        self._position += len(data)
        if len(data) < needed:
            data += bytes(needed - len(data))
        return AudioChunk(data=data, sample_rate=self._sample_rate)

    def stream(self) -> Iterator[AudioChunk]:
        """Yield chunks until the preset audio is exhausted."""
        if not self._is_active:
            self.start()
        while self._is_active and self._position < len(self._audio_source):
            yield self.read(self._chunk_size)

    @property
    def is_active(self) -> bool:
        """Return True if 'capturing'."""
        return self._is_active

    @property
    def sample_rate(self) -> int:
        """Get sample rate."""
        return self._sample_rate


class MockAudioPlayback:
    """Mock speaker that records played audio.

    Implements the AudioPlayback protocol.
    """

    def __init__(self) -> None:
        self._played: list[tuple[bytes, int]] = []
        self._stopped = False

    def play(self, audio: bytes, sample_rate: int) -> None:
        """Record audio that would be played."""
        self._played.append((audio, sample_rate))

    def stop(self) -> None:
        """Record a stop request."""
        self._stopped = True

    @property
    def is_playing(self) -> bool:
        """Mock playback finishes instantly."""
        return False

    @property
    def play_count(self) -> int:
        """Number of play() calls."""
        return len(self._played)

    @property
    def all_played_audio(self) -> list[tuple[bytes, int]]:
        """All (audio, sample_rate) pairs that were played."""
        return self._played.copy()

    @property
    def stopped(self) -> bool:
        """Whether stop() was called."""
        return self._stopped


__all__ = ["MockAudioCapture", "MockAudioPlayback"]
