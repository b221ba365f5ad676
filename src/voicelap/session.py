"""Stopwatch session.

Coordinates the stopwatch pipeline:
Recognizer → VoiceControlService queue → Interpreter → Tracker → Speaker
with a periodic tick that also drives interval announcements.
"""

import logging
import threading
import time
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from .commands.announcer import IntervalAnnouncer
from .commands.interpreter import VoiceCommandInterpreter, VoiceCommandResult
from .commands.vocabulary import DEFAULT_VOCABULARY, CommandFamily, Vocabulary
from .config.settings import TimerSettings, save_settings
from .stopwatch.formatting import format_display
from .stopwatch.models import LapRecord, TimerPhase
from .stopwatch.tracker import ElapsedTimeTracker
from .tts.feedback import SpokenFeedback
from .voice.service import VoiceControlService, VoiceStatus

if TYPE_CHECKING:
    from .config import VoiceLapConfig
    from .tts.speaker import Speaker

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_MS = 50


class StopwatchSession:
    """One interactive stopwatch session.

    All state changes go through a single lock, so voice commands drained
    on the tick thread and manual controls from a UI thread never interleave.
    """

    def __init__(
        self,
        tracker: ElapsedTimeTracker | None = None,
        speaker: "Speaker | None" = None,
        voice_service: VoiceControlService | None = None,
        settings: TimerSettings | None = None,
        settings_path: Path | None = None,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        on_result: Callable[[VoiceCommandResult], None] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            tracker: Stopwatch (a fresh one if None)
            speaker: Speech output, or None to only log announcements
            voice_service: Voice control, or None if voice is unavailable
            settings: User settings (defaults if None)
            settings_path: Where to persist settings changes (not persisted if None)
            vocabulary: Command vocabulary
            tick_interval_ms: Period of the background tick
            on_result: Callback for each interpreted transcript
        """
        self._tracker = tracker or ElapsedTimeTracker()
        self._settings = settings or TimerSettings()
        self._settings_path = settings_path
        self._voice = voice_service
        self._tick_interval = tick_interval_ms / 1000
        self._on_result = on_result

        self._feedback = SpokenFeedback(speaker, volume=self._settings.volume)
        self._interpreter = VoiceCommandInterpreter(self._tracker, self._feedback, vocabulary)
        self._announcer = IntervalAnnouncer(
            self._tracker, self._feedback, self._settings.interval_seconds
        )

        self._lock = threading.RLock()
        self._running = False
        self._thread: threading.Thread | None = None

    @classmethod
    def from_config(
        cls,
        config: "VoiceLapConfig",
        settings: TimerSettings | None = None,
        settings_path: Path | None = None,
        use_mocks: bool = False,
        transcript_stream: TextIO | None = None,
        on_result: Callable[[VoiceCommandResult], None] | None = None,
    ) -> "StopwatchSession":
        """Create a session from configuration.

        Args:
            config: VoiceLap configuration
            settings: Persisted user settings
            settings_path: Where to persist settings changes
            use_mocks: Use mock speech engines for testing
            transcript_stream: Read transcripts from this stream instead of a microphone
            on_result: Callback for each interpreted transcript

        Returns:
            Configured StopwatchSession. Voice control is left uninitialized;
            call start_voice() to bring it up.
        """
        from .stt import create_recognizer
        from .tts import create_speaker

        speaker = create_speaker(config.tts, config.audio, use_mock=use_mocks)

        voice_service: VoiceControlService | None = None
        try:
            recognizer = create_recognizer(
                config.voice,
                config.audio,
                use_mock=use_mocks,
                stream=transcript_stream,
            )
            voice_service = VoiceControlService(
                recognizer,
                init_timeout_seconds=config.voice.init_timeout_seconds,
                restart_backoff_seconds=config.voice.restart_backoff_seconds,
            )
        except RuntimeError as e:
            logger.warning(f"Voice control unavailable: {e}")

        return cls(
            speaker=speaker,
            voice_service=voice_service,
            settings=settings,
            settings_path=settings_path,
            tick_interval_ms=config.stopwatch.tick_interval_ms,
            on_result=on_result,
        )

    # Voice control

    def start_voice(self) -> bool:
        """Initialize the recognizer and listen if voice control is enabled.

        Returns:
            True if the recognizer is usable, False if voice is unavailable.
        """
        if self._voice is None:
            return False
        if not self._voice.initialize():
            return False
        if self._settings.voice_control_enabled:
            return self._voice.start_listening()
        return True

    def on_voice_result(self, text: str | None) -> VoiceCommandResult:
        """Interpret one transcript and apply its command."""
        with self._lock:
            result = self._interpreter.on_voice_result(text)
            if result.applied and result.family == CommandFamily.RESET:
                self._announcer.clear()
        if self._on_result is not None:
            self._on_result(result)
        return result

    # Manual controls

    def start(self) -> bool:
        """Start or resume the clock."""
        return self._dispatch(CommandFamily.START)

    def stop(self) -> bool:
        """Stop the clock and announce the total."""
        return self._dispatch(CommandFamily.STOP)

    def lap(self) -> bool:
        """Record a lap."""
        return self._dispatch(CommandFamily.LAP)

    def reset(self) -> bool:
        """Reset the clock and clear laps."""
        return self._dispatch(CommandFamily.RESET)

    def toggle(self) -> bool:
        """Start if stopped, stop if running (the single start/stop button)."""
        with self._lock:
            if self._tracker.is_active:
                return self._dispatch(CommandFamily.STOP)
            return self._dispatch(CommandFamily.START)

    def _dispatch(self, family: CommandFamily) -> bool:
        with self._lock:
            applied = self._interpreter.dispatch(family)
            if applied and family == CommandFamily.RESET:
                self._announcer.clear()
            return applied

    # Tick

    def tick(self) -> list[VoiceCommandResult]:
        """Process queued transcripts and check the interval announcement.

        Returns:
            Interpretations of the transcripts processed in this tick.
        """
        results: list[VoiceCommandResult] = []
        if self._voice is not None:
            for text in self._voice.drain():
                results.append(self.on_voice_result(text))

        with self._lock:
            self._announcer.check()
        return results

    def run(self) -> None:
        """Start ticking in a background thread."""
        if self._running:
            return

        self._running = True
        self._thread = threading.Thread(target=self._run_loop, daemon=True)
        self._thread.start()
        logger.info("Stopwatch session started")

    def shutdown(self) -> None:
        """Stop ticking, stop listening and silence speech."""
        self._running = False
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None
        if self._voice is not None:
            self._voice.stop_listening()
        self._feedback.stop()
        logger.info("Stopwatch session stopped")

    def _run_loop(self) -> None:
        while self._running:
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Tick failed: {e}")
            time.sleep(self._tick_interval)

    # Settings

    def update_settings(
        self,
        volume: float | None = None,
        interval_seconds: int | None = None,
        voice_control_enabled: bool | None = None,
    ) -> TimerSettings:
        """Change settings, apply them immediately and persist them.

        Returns:
            The updated settings.
        """
        with self._lock:
            settings = TimerSettings(
                volume=self._settings.volume if volume is None else volume,
                interval_seconds=(
                    self._settings.interval_seconds
                    if interval_seconds is None
                    else interval_seconds
                ),
                voice_control_enabled=(
                    self._settings.voice_control_enabled
                    if voice_control_enabled is None
                    else voice_control_enabled
                ),
            )
            self._settings = settings
            self._feedback.volume = settings.volume
            self._announcer.interval_seconds = settings.interval_seconds

        if voice_control_enabled is not None and self._voice is not None:
            if voice_control_enabled:
                self._voice.enable()
            else:
                self._voice.stop_listening()

        if self._settings_path is not None:
            save_settings(settings, self._settings_path)
        return settings

    # Read-only views

    def elapsed(self) -> timedelta:
        """Total active time."""
        return self._tracker.elapsed()

    def current_lap_elapsed(self) -> timedelta:
        """Active time in the current lap."""
        return self._tracker.current_lap_elapsed()

    def display(self) -> str:
        """Clock face for the elapsed time (MM:SS:CS)."""
        return format_display(self._tracker.elapsed())

    @property
    def laps(self) -> tuple[LapRecord, ...]:
        """Completed laps, newest first."""
        return self._tracker.laps

    @property
    def phase(self) -> TimerPhase:
        """Current stopwatch phase."""
        return self._tracker.phase

    @property
    def settings(self) -> TimerSettings:
        """Current user settings."""
        return self._settings

    @property
    def voice_status(self) -> VoiceStatus:
        """Voice control state (UNAVAILABLE if no recognizer could be built)."""
        if self._voice is None:
            return VoiceStatus.UNAVAILABLE
        return self._voice.status

    @property
    def voice_status_message(self) -> str:
        """User-facing voice control status."""
        if self._voice is None:
            return "Speech service unavailable"
        return self._voice.status_message

    @property
    def last_result(self) -> VoiceCommandResult | None:
        """Most recent interpreted transcript."""
        return self._interpreter.last_result

    @property
    def is_running(self) -> bool:
        """Whether the background tick is running."""
        return self._running


__all__ = ["DEFAULT_TICK_INTERVAL_MS", "StopwatchSession"]
