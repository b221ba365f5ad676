"""Voice command interpretation.

Classifies recognized transcripts against the command vocabulary and
dispatches at most one stopwatch transition per utterance.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..stopwatch.formatting import format_confirmation
from .vocabulary import DEFAULT_VOCABULARY, CommandFamily, Vocabulary

if TYPE_CHECKING:
    from ..stopwatch.tracker import ElapsedTimeTracker
    from ..tts.feedback import SpokenFeedback

logger = logging.getLogger(__name__)

# Placeholder for empty transcripts; never matches a command word.
NO_SPEECH = "(no speech)"


@dataclass(frozen=True)
class VoiceCommandResult:
    """Outcome of interpreting one transcript.

    Attributes:
        text: Normalized transcript.
        is_command: Whether the text matched the command vocabulary.
        family: Command family that was dispatched, if any.
        applied: Whether a stopwatch transition took place.
    """

    text: str
    is_command: bool
    family: CommandFamily | None = None
    applied: bool = False


def normalize_transcript(text: str | None) -> str:
    """Lowercase and trim a transcript, substituting a placeholder when empty."""
    normalized = (text or "").strip().lower()
    return normalized or NO_SPEECH


class VoiceCommandInterpreter:
    """Maps transcripts to stopwatch transitions with spoken confirmation.

    The same dispatch path serves voice commands and manual controls, so
    both produce identical confirmations.
    """

    def __init__(
        self,
        tracker: "ElapsedTimeTracker",
        feedback: "SpokenFeedback | None" = None,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    ) -> None:
        """Initialize the interpreter.

        Args:
            tracker: Stopwatch to drive.
            feedback: Spoken confirmation output (silent if None).
            vocabulary: Command and ignore words.
        """
        self._tracker = tracker
        self._feedback = feedback
        self._vocabulary = vocabulary
        self._last_result: VoiceCommandResult | None = None

    def classify(self, text: str | None) -> VoiceCommandResult:
        """Classify a transcript without dispatching anything."""
        normalized = normalize_transcript(text)
        if normalized == NO_SPEECH or self._vocabulary.is_ignored(normalized):
            return VoiceCommandResult(text=normalized, is_command=False)

        family = self._vocabulary.match_family(normalized)
        if family is None:
            return VoiceCommandResult(text=normalized, is_command=False)
        return VoiceCommandResult(text=normalized, is_command=True, family=family)

    def on_voice_result(self, text: str | None) -> VoiceCommandResult:
        """Classify a transcript and dispatch its command, if any.

        Args:
            text: Raw transcript from the speech recognizer.

        Returns:
            VoiceCommandResult describing what was heard and done.
        """
        result = self.classify(text)
        logger.debug(f"Heard '{result.text}' (command={result.is_command})")

        if result.is_command and result.family is not None:
            applied = self.dispatch(result.family)
            result = VoiceCommandResult(
                text=result.text,
                is_command=True,
                family=result.family,
                applied=applied,
            )

        self._last_result = result
        return result

    def dispatch(self, family: CommandFamily) -> bool:
        """Apply a command family's transition and confirm it aloud.

        Returns:
            True if the transition applied, False if it was a no-op.
        """
        if family == CommandFamily.START:
            return self._start()
        elif family == CommandFamily.STOP:
            return self._stop()
        elif family == CommandFamily.LAP:
            return self._lap()
        elif family == CommandFamily.RESET:
            return self._reset()
        return False

    def _start(self) -> bool:
        resuming = self._tracker.accumulated.total_seconds() > 0
        if not self._tracker.start():
            return False
        logger.info("Command executed: start")
        self._say("Timer resumed" if resuming else "Timer started")
        return True

    def _stop(self) -> bool:
        total = self._tracker.stop()
        if total is None:
            return False
        logger.info(f"Command executed: stop ({total})")
        self._say(format_confirmation(total))
        return True

    def _lap(self) -> bool:
        record = self._tracker.lap()
        if record is None:
            return False
        logger.info(f"Command executed: lap {record.lap_number}")
        self._say(f"Lap {record.lap_number}, {format_confirmation(record.lap_time)}")
        return True

    def _reset(self) -> bool:
        self._tracker.reset()
        logger.info("Command executed: reset")
        self._say("Timer reset")
        return True

    def _say(self, text: str) -> None:
        if self._feedback is not None:
            self._feedback.say(text)

    @property
    def last_result(self) -> VoiceCommandResult | None:
        """Most recent interpretation, kept for display."""
        return self._last_result

    @property
    def vocabulary(self) -> Vocabulary:
        """Vocabulary in use."""
        return self._vocabulary


__all__ = [
    "NO_SPEECH",
    "VoiceCommandInterpreter",
    "VoiceCommandResult",
    "normalize_transcript",
]
