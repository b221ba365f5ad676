"""Voice control service.

Owns the speech recognizer's lifecycle and serializes its callbacks into a
queue drained by a single consumer.
"""

import logging
import queue
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..stt.recognizer import extract_transcript

if TYPE_CHECKING:
    from ..stt.recognizer import SpeechRecognizer

logger = logging.getLogger(__name__)

DEFAULT_INIT_TIMEOUT_SECONDS = 60.0
DEFAULT_RESTART_BACKOFF_SECONDS = 2.0


class VoiceStatus(Enum):
    """Lifecycle state of voice control."""

    DISABLED = "disabled"
    INITIALIZING = "initializing"
    READY = "ready"
    LISTENING = "listening"
    UNAVAILABLE = "unavailable"


@dataclass
class _RecognizerError:
    """Queue marker for an error raised on the recognizer's thread."""

    error: Exception


class VoiceControlService:
    """Lifecycle and delivery boundary for a SpeechRecognizer.

    Failures never propagate out of this class: they move the service to
    UNAVAILABLE and set a user-facing status message.
    """

    def __init__(
        self,
        recognizer: "SpeechRecognizer",
        init_timeout_seconds: float = DEFAULT_INIT_TIMEOUT_SECONDS,
        restart_backoff_seconds: float = DEFAULT_RESTART_BACKOFF_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the service.

        Args:
            recognizer: Speech engine adapter
            init_timeout_seconds: Limit on recognizer initialization
            restart_backoff_seconds: Pause between stop and re-initialize on restart
            sleep: Sleep function (injectable for tests)
        """
        self._recognizer = recognizer
        self._init_timeout = init_timeout_seconds
        self._restart_backoff = restart_backoff_seconds
        self._sleep = sleep

        self._queue: queue.Queue[str | _RecognizerError] = queue.Queue()
        self._status = VoiceStatus.DISABLED
        self._status_message = "Voice control not started"
        self._restart_thread: threading.Thread | None = None
        self._restart_cancelled = False

        recognizer.on_result(self._enqueue_result)
        recognizer.on_error(self._enqueue_error)

    def _set_status(self, status: VoiceStatus, message: str) -> None:
        if status != self._status:
            logger.info(f"Voice control: {self._status.value} -> {status.value} ({message})")
        self._status = status
        self._status_message = message

    def _enqueue_result(self, payload: str) -> None:
        self._queue.put(payload)

    def _enqueue_error(self, error: Exception) -> None:
        self._queue.put(_RecognizerError(error))

    def initialize(self) -> bool:
        """Initialize the recognizer within the configured timeout.

        Returns:
            True if the recognizer is ready, False if voice control is unavailable.
        """
        self._set_status(VoiceStatus.INITIALIZING, "Loading speech model")

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="voicelap-stt-init")
        future = executor.submit(self._recognizer.initialize)
        try:
            future.result(timeout=self._init_timeout)
        except FutureTimeoutError:
            logger.warning(f"Speech recognizer did not initialize within {self._init_timeout}s")
            self._set_status(VoiceStatus.UNAVAILABLE, "Speech service timed out")
            return False
        except Exception as e:
            logger.warning(f"Speech recognizer initialization failed: {e}")
            self._set_status(VoiceStatus.UNAVAILABLE, f"Speech service unavailable: {e}")
            return False
        finally:
            # A timed-out initialize keeps running on its worker; do not wait for it.
            executor.shutdown(wait=False)

        self._set_status(VoiceStatus.READY, "Speech service ready")
        return True

    def start_listening(self) -> bool:
        """Start the recognizer.

        Returns:
            True if listening, False otherwise.
        """
        if self._status == VoiceStatus.LISTENING:
            return True
        if self._status != VoiceStatus.READY:
            logger.debug(f"Cannot start listening while {self._status.value}")
            return False

        try:
            self._recognizer.start()
        except PermissionError as e:
            logger.warning(f"Microphone permission denied: {e}")
            self._set_status(VoiceStatus.UNAVAILABLE, "Microphone permission denied")
            return False
        except Exception as e:
            logger.warning(f"Failed to start speech recognition: {e}")
            self._set_status(VoiceStatus.UNAVAILABLE, f"Speech service unavailable: {e}")
            return False

        self._set_status(VoiceStatus.LISTENING, "Listening")
        return True

    def stop_listening(self) -> None:
        """Stop the recognizer, keeping it initialized.

        A restart in progress is told not to resume listening.
        """
        if self.is_restarting:
            self._restart_cancelled = True
        if self._status != VoiceStatus.LISTENING:
            return
        self._stop_recognizer()
        self._set_status(VoiceStatus.READY, "Voice control off")

    def _stop_recognizer(self) -> None:
        try:
            self._recognizer.stop()
        except Exception as e:
            logger.warning(f"Error stopping speech recognition: {e}")

    def restart(self) -> bool:
        """Stop, back off, re-initialize and resume listening. One attempt.

        Returns:
            True if listening again, False if voice control is now unavailable.
        """
        logger.info(f"Restarting speech recognition in {self._restart_backoff}s")
        self._stop_recognizer()
        self._sleep(self._restart_backoff)
        if not self.initialize():
            return False
        if self._restart_cancelled:
            self._set_status(VoiceStatus.READY, "Voice control off")
            return False
        return self.start_listening()

    def drain(self) -> list[str]:
        """Return queued transcripts in delivery order.

        Malformed payloads are discarded. A queued recognizer error starts a
        single restart attempt on a worker thread and returns at once.
        Transcripts queued before the error are kept.
        """
        transcripts: list[str] = []
        restart_needed = False

        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                break

            if isinstance(item, _RecognizerError):
                logger.warning(f"Speech recognizer error: {item.error}")
                restart_needed = True
                continue

            text = extract_transcript(item)
            if text is None:
                continue
            transcripts.append(text)

        if restart_needed and self._status == VoiceStatus.LISTENING:
            self._set_status(VoiceStatus.READY, "Recovering from speech error")
            self._restart_cancelled = False
            self._restart_thread = threading.Thread(
                target=self.restart, name="voicelap-stt-restart", daemon=True
            )
            self._restart_thread.start()

        return transcripts

    def enable(self) -> bool:
        """Initialize if needed and start listening.

        An unavailable service gets one fresh initialization attempt. While a
        restart is running this only lets it resume listening.

        Returns:
            True if listening.
        """
        if self.is_restarting:
            self._restart_cancelled = False
            return False
        if self._status in (VoiceStatus.DISABLED, VoiceStatus.UNAVAILABLE):
            if not self.initialize():
                return False
        return self.start_listening()

    def wait_for_restart(self, timeout: float | None = None) -> bool:
        """Block until a pending restart finishes.

        Returns:
            True if no restart is running afterwards.
        """
        thread = self._restart_thread
        if thread is not None:
            thread.join(timeout)
        return not self.is_restarting

    @property
    def is_restarting(self) -> bool:
        """Whether a restart is running on its worker thread."""
        return self._restart_thread is not None and self._restart_thread.is_alive()

    @property
    def status(self) -> VoiceStatus:
        """Current lifecycle state."""
        return self._status

    @property
    def status_message(self) -> str:
        """User-facing description of the current state."""
        return self._status_message

    @property
    def is_listening(self) -> bool:
        """Whether transcripts are being delivered."""
        return self._status == VoiceStatus.LISTENING

    @property
    def is_available(self) -> bool:
        """Whether the recognizer is usable (ready or listening)."""
        return self._status in (VoiceStatus.READY, VoiceStatus.LISTENING)


__all__ = [
    "DEFAULT_INIT_TIMEOUT_SECONDS",
    "DEFAULT_RESTART_BACKOFF_SECONDS",
    "VoiceControlService",
    "VoiceStatus",
]
