"""Unit tests for VoiceCommandInterpreter."""

from datetime import timedelta

import pytest

from voicelap.commands import (
    NO_SPEECH,
    CommandFamily,
    VoiceCommandInterpreter,
    normalize_transcript,
)
from voicelap.stopwatch import ElapsedTimeTracker
from voicelap.tts import MockSpeaker, SpokenFeedback


@pytest.fixture
def speaker() -> MockSpeaker:
    """Speaker recording confirmations."""
    return MockSpeaker()


@pytest.fixture
def tracker(clock) -> ElapsedTimeTracker:
    """Tracker driven by the fake clock."""
    return ElapsedTimeTracker(clock=clock)


@pytest.fixture
def interpreter(tracker: ElapsedTimeTracker, speaker: MockSpeaker) -> VoiceCommandInterpreter:
    """Interpreter wired to a mock speaker."""
    return VoiceCommandInterpreter(tracker, SpokenFeedback(speaker))


class TestNormalize:
    """Tests for transcript normalization."""

    def test_lowercase_and_trim(self) -> None:
        """Test case and surrounding whitespace are removed."""
        assert normalize_transcript("  Start \n") == "start"

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_becomes_placeholder(self, text: str | None) -> None:
        """Test empty transcripts become the no-speech placeholder."""
        assert normalize_transcript(text) == NO_SPEECH


class TestClassify:
    """Tests for classification without dispatch."""

    def test_command(self, interpreter: VoiceCommandInterpreter) -> None:
        """Test a command word is classified with its family."""
        result = interpreter.classify("LAP")
        assert result.is_command is True
        assert result.family == CommandFamily.LAP
        assert result.applied is False

    def test_ignored_word(self, interpreter: VoiceCommandInterpreter) -> None:
        """Test an exact ignore word is not a command."""
        result = interpreter.classify("five")
        assert result.is_command is False
        assert result.family is None

    def test_ignored_word_containing_trigger(self, interpreter: VoiceCommandInterpreter) -> None:
        """Test 'good' is ignored even though it contains 'go'."""
        assert interpreter.classify("good").is_command is False

    def test_no_speech(self, interpreter: VoiceCommandInterpreter) -> None:
        """Test empty input is reported as no speech."""
        result = interpreter.classify("")
        assert result.text == NO_SPEECH
        assert result.is_command is False

    def test_unrelated(self, interpreter: VoiceCommandInterpreter) -> None:
        """Test unrelated speech is not a command."""
        assert interpreter.classify("what a nice day").is_command is False


class TestDispatch:
    """Tests for dispatching voice commands."""

    def test_start(
        self, interpreter: VoiceCommandInterpreter, tracker: ElapsedTimeTracker, speaker: MockSpeaker
    ) -> None:
        """Test 'start' starts the clock and confirms."""
        result = interpreter.on_voice_result("start")
        assert result.applied is True
        assert tracker.is_active is True
        assert speaker.spoken_texts == ["Timer started"]

    def test_resume_confirmation(
        self, interpreter: VoiceCommandInterpreter, clock, speaker: MockSpeaker
    ) -> None:
        """Test starting with accumulated time confirms a resume."""
        interpreter.on_voice_result("start")
        clock.advance(3)
        interpreter.on_voice_result("pause")
        interpreter.on_voice_result("resume")
        assert speaker.last_text == "Timer resumed"

    def test_stop_speaks_total(
        self, interpreter: VoiceCommandInterpreter, clock, speaker: MockSpeaker
    ) -> None:
        """Test stop after 65 seconds speaks the total."""
        interpreter.on_voice_result("go")
        clock.advance(65)
        result = interpreter.on_voice_result("stop")
        assert result.applied is True
        assert speaker.last_text == "1 minute and 5 seconds"

    def test_lap_speaks_lap_time(
        self, interpreter: VoiceCommandInterpreter, tracker: ElapsedTimeTracker, clock,
        speaker: MockSpeaker,
    ) -> None:
        """Test lap records and announces the segment."""
        interpreter.on_voice_result("start")
        clock.advance(5)
        interpreter.on_voice_result("lap")
        assert tracker.laps[0].lap_time == timedelta(seconds=5)
        assert speaker.last_text == "Lap 1, 5 seconds"

    def test_reset(
        self, interpreter: VoiceCommandInterpreter, tracker: ElapsedTimeTracker, clock,
        speaker: MockSpeaker,
    ) -> None:
        """Test reset clears the clock and confirms."""
        interpreter.on_voice_result("start")
        clock.advance(5)
        result = interpreter.on_voice_result("clear")
        assert result.family == CommandFamily.RESET
        assert result.applied is True
        assert tracker.elapsed() == timedelta(0)
        assert speaker.last_text == "Timer reset"

    def test_inapplicable_command_is_silent(
        self, interpreter: VoiceCommandInterpreter, speaker: MockSpeaker
    ) -> None:
        """Test stop while idle is a command but applies nothing."""
        result = interpreter.on_voice_result("stop")
        assert result.is_command is True
        assert result.family == CommandFamily.STOP
        assert result.applied is False
        assert speaker.spoken_texts == []

    def test_lap_while_stopped_is_silent(
        self, interpreter: VoiceCommandInterpreter, speaker: MockSpeaker
    ) -> None:
        """Test lap does nothing before the clock starts."""
        result = interpreter.on_voice_result("split")
        assert result.applied is False
        assert speaker.spoken_texts == []

    def test_one_transition_per_utterance(
        self, interpreter: VoiceCommandInterpreter, tracker: ElapsedTimeTracker
    ) -> None:
        """Test a phrase with several commands dispatches only the first by priority."""
        result = interpreter.on_voice_result("start stop")
        assert result.family == CommandFamily.START
        assert tracker.is_active is True

    def test_ignored_does_not_dispatch(
        self, interpreter: VoiceCommandInterpreter, tracker: ElapsedTimeTracker
    ) -> None:
        """Test ignore words never change state."""
        interpreter.on_voice_result("ten")
        assert tracker.is_active is False

    def test_last_result_tracks_non_commands(self, interpreter: VoiceCommandInterpreter) -> None:
        """Test the last result is kept for display."""
        assert interpreter.last_result is None
        interpreter.on_voice_result("hello")
        assert interpreter.last_result is not None
        assert interpreter.last_result.text == "hello"

    def test_silent_without_feedback(self, tracker: ElapsedTimeTracker) -> None:
        """Test the interpreter works without speech output."""
        interpreter = VoiceCommandInterpreter(tracker)
        assert interpreter.on_voice_result("start").applied is True

    def test_speech_failure_does_not_block_transition(
        self, interpreter: VoiceCommandInterpreter, tracker: ElapsedTimeTracker,
        speaker: MockSpeaker,
    ) -> None:
        """Test a broken speaker never prevents the state change."""
        speaker.set_error("device unplugged")
        result = interpreter.on_voice_result("start")
        assert result.applied is True
        assert tracker.is_active is True
