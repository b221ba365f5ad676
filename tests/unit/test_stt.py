"""Unit tests for speech recognizers."""

import io
import time
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from voicelap.audio.mock import MockAudioCapture
from voicelap.config import VoiceConfig
from voicelap.stt import (
    MockRecognizer,
    TextStreamRecognizer,
    create_recognizer,
    extract_transcript,
)
from voicelap.stt.whisper import WhisperRecognizer


class TestExtractTranscript:
    """Tests for recognizer payload decoding."""

    def test_plain_text(self) -> None:
        """Test plain text passes through."""
        assert extract_transcript("start") == "start"

    def test_json_text(self) -> None:
        """Test the text field of engine JSON is used."""
        assert extract_transcript('{"text": "lap"}') == "lap"

    def test_bytes(self) -> None:
        """Test UTF-8 bytes are decoded."""
        assert extract_transcript(b"stop") == "stop"

    @pytest.mark.parametrize(
        "payload",
        ['{"text": ', '{"partial": "st"}', '{"text": 5}', b"\xff\xfe", None, 42],
    )
    def test_malformed(self, payload: object) -> None:
        """Test malformed payloads yield None."""
        assert extract_transcript(payload) is None

    def test_empty_json_text(self) -> None:
        """Test an empty transcript is returned for the interpreter to label."""
        assert extract_transcript('{"text": ""}') == ""


class TestMockRecognizer:
    """Tests for MockRecognizer."""

    def test_emit_only_while_listening(self) -> None:
        """Test results are delivered only after start."""
        recognizer = MockRecognizer()
        heard: list[str] = []
        recognizer.on_result(heard.append)

        recognizer.emit("ignored")
        recognizer.initialize()
        recognizer.start()
        recognizer.emit("start")
        recognizer.stop()
        recognizer.emit("ignored")

        assert heard == ["start"]

    def test_start_requires_initialize(self) -> None:
        """Test start before initialize raises."""
        with pytest.raises(RuntimeError):
            MockRecognizer().start()

    def test_fail_reports_error(self) -> None:
        """Test fail stops listening and calls the error callback."""
        recognizer = MockRecognizer()
        errors: list[Exception] = []
        recognizer.on_error(errors.append)
        recognizer.initialize()
        recognizer.start()

        recognizer.fail(RuntimeError("boom"))

        assert recognizer.is_listening is False
        assert len(errors) == 1


class TestTextStreamRecognizer:
    """Tests for the line-oriented recognizer."""

    def _wait_for(self, condition, timeout: float = 2.0) -> None:
        deadline = time.monotonic() + timeout
        while not condition() and time.monotonic() < deadline:
            time.sleep(0.01)

    def test_lines_become_transcripts(self) -> None:
        """Test each line is delivered as one transcript."""
        recognizer = TextStreamRecognizer(io.StringIO("start\nlap\n\nstop\n"))
        heard: list[str] = []
        recognizer.on_result(heard.append)
        recognizer.initialize()
        recognizer.start()

        self._wait_for(lambda: len(heard) == 4)

        assert heard == ["start", "lap", "", "stop"]

    def test_stopped_recognizer_delivers_nothing(self) -> None:
        """Test nothing is read before start."""
        recognizer = TextStreamRecognizer(io.StringIO("start\n"))
        heard: list[str] = []
        recognizer.on_result(heard.append)
        recognizer.initialize()
        time.sleep(0.05)
        assert heard == []


class TestCreateRecognizer:
    """Tests for the recognizer factory."""

    def test_mock(self) -> None:
        """Test the mock flag returns a MockRecognizer."""
        assert isinstance(create_recognizer(use_mock=True), MockRecognizer)

    def test_mock_engine(self) -> None:
        """Test the mock engine name returns a MockRecognizer."""
        assert isinstance(create_recognizer(VoiceConfig(engine="mock")), MockRecognizer)

    def test_stream(self) -> None:
        """Test a stream selects the text recognizer."""
        recognizer = create_recognizer(VoiceConfig(), stream=io.StringIO(""))
        assert isinstance(recognizer, TextStreamRecognizer)

    def test_unknown_engine(self) -> None:
        """Test an unknown engine raises RuntimeError."""
        with pytest.raises(RuntimeError, match="Unknown speech engine"):
            create_recognizer(VoiceConfig(engine="dragon"))

    def test_whisper_model_path(self, tmp_path: Path) -> None:
        """Test a configured model directory is handed to the whisper recognizer."""
        config = VoiceConfig(engine="whisper", model_path=str(tmp_path / "tiny"))
        with (
            patch("voicelap.audio.create_audio_capture", return_value=MockAudioCapture()),
            patch("voicelap.stt.whisper.FASTER_WHISPER_AVAILABLE", True),
        ):
            recognizer = create_recognizer(config)

        assert isinstance(recognizer, WhisperRecognizer)
        assert recognizer._model_path == tmp_path / "tiny"


class TestWhisperRecognizer:
    """Tests for the faster-whisper recognizer with a stubbed model."""

    def test_unavailable(self) -> None:
        """Test a missing faster-whisper install raises RuntimeError."""
        with patch("voicelap.stt.whisper.FASTER_WHISPER_AVAILABLE", False):
            with pytest.raises(RuntimeError, match="faster-whisper"):
                WhisperRecognizer(capture=MockAudioCapture())

    def test_start_requires_model(self) -> None:
        """Test start before initialize raises."""
        with patch("voicelap.stt.whisper.FASTER_WHISPER_AVAILABLE", True):
            recognizer = WhisperRecognizer(capture=MockAudioCapture())
        with pytest.raises(RuntimeError):
            recognizer.start()

    def test_each_window_transcribed(self) -> None:
        """Test one transcript is emitted per captured window."""
        capture = MockAudioCapture(sample_rate=16000, chunk_size=1600)
        capture.set_audio_data(bytes(16000 * 2))
        with patch("voicelap.stt.whisper.FASTER_WHISPER_AVAILABLE", True):
            recognizer = WhisperRecognizer(capture=capture, window_seconds=0.5)

        segment = MagicMock()
        segment.text = " Lap "
        model = MagicMock()
        model.transcribe.return_value = ([segment], None)
        recognizer._model = model

        heard: list[str] = []
        recognizer.on_result(heard.append)
        recognizer.start()
        deadline = time.monotonic() + 2.0
        while len(heard) < 2 and time.monotonic() < deadline:
            time.sleep(0.01)
        recognizer.stop()

        assert heard == ["Lap", "Lap"]
        assert capture.is_active is False

    def test_stream_error_reported(self) -> None:
        """Test a capture failure reaches the error callback."""
        capture = MagicMock()
        capture.sample_rate = 16000
        capture.stream.side_effect = OSError("device unplugged")
        with patch("voicelap.stt.whisper.FASTER_WHISPER_AVAILABLE", True):
            recognizer = WhisperRecognizer(capture=capture)
        recognizer._model = MagicMock()

        errors: list[Exception] = []
        recognizer.on_error(errors.append)
        recognizer.start()
        deadline = time.monotonic() + 2.0
        while not errors and time.monotonic() < deadline:
            time.sleep(0.01)

        assert isinstance(errors[0], OSError)

    def test_initialize_prefers_local_model(self, tmp_path: Path) -> None:
        """Test an existing model directory is loaded instead of the size name."""
        model_dir = tmp_path / "tiny"
        model_dir.mkdir()
        with patch("voicelap.stt.whisper.FASTER_WHISPER_AVAILABLE", True):
            recognizer = WhisperRecognizer(capture=MockAudioCapture(), model_path=model_dir)

        with patch("voicelap.stt.whisper.WhisperModel") as model_cls:
            recognizer.initialize()

        model_cls.assert_called_once_with(str(model_dir), device="cpu", compute_type="int8")
